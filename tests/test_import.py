"""Verify package imports work correctly."""


def test_import_cqcode() -> None:
    """Test that cqcode can be imported and version matches pyproject."""
    import tomllib
    from pathlib import Path

    import cqcode

    with (Path(__file__).resolve().parent.parent / "pyproject.toml").open("rb") as f:
        expected = tomllib.load(f)["project"]["version"]
    assert cqcode.__version__ == expected


def test_version_format() -> None:
    """Test version string format."""
    from cqcode import __version__

    parts = __version__.split(".")
    assert len(parts) == 3
    assert all(part.isdigit() for part in parts)


def test_all_exports_resolve() -> None:
    import cqcode

    for name in cqcode.__all__:
        assert hasattr(cqcode, name), name
