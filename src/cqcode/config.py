"""ContextVar-based codec configuration for cqcode.

Provides thread-local configuration using Python's ContextVars (PEP 567).
Config is set once per CQCode instance, read by the lexer, serializer and
charset helpers running in the same context.

Thread Safety:
    ContextVars are thread-local by design. Each thread has independent storage,
    so no locks are needed.

Usage:
    # In the CQCode class
    codec = CQCode(unescape_params=True)
    message = codec.parse("[CQ:share,title=a&#44;b]")

    # Direct usage (advanced)
    from cqcode.config import set_codec_config, reset_codec_config, CodecConfig

    set_codec_config(CodecConfig(sort_params=True))
    try:
        text = dumps(message)
    finally:
        reset_codec_config()

    # Or use the context manager
    with codec_config_context(CodecConfig(sort_params=True)):
        text = dumps(message)

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, fields
from typing import Any


@dataclass(frozen=True, slots=True)
class CodecConfig:
    """Immutable codec configuration.

    Attributes:
        unescape_params: Run tag parameter values through ``unescape`` while
            tokenizing. Off by default: values are kept exactly as found.
        allow_empty_values: Accept ``key=`` with an empty value. Off by
            default: an empty value makes the whole tag ill-formed.
        sort_params: Serialize parameters in ascending key order instead of
            insertion order.
        charset: Legacy host charset used by ``cqcode.charset``.
        convert_unicode_emoji: Rewrite legacy ``[CQ:emoji,id=N]`` tags into
            Unicode characters when decoding host text.

    """

    unescape_params: bool = False
    allow_empty_values: bool = False
    sort_params: bool = False
    charset: str = "gb18030"
    convert_unicode_emoji: bool = True

    @classmethod
    def from_dict(cls, config_dict: dict[str, Any]) -> "CodecConfig":
        """Create CodecConfig from dictionary.

        Only includes keys that are valid CodecConfig fields; unknown keys
        are silently ignored.

        Example:
            >>> config = CodecConfig.from_dict({
            ...     "sort_params": True,
            ...     "unknown_key": "ignored",
            ... })
            >>> config.sort_params
            True

        """
        valid_fields = {f.name for f in fields(cls)}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: CodecConfig = CodecConfig()

_codec_config: ContextVar[CodecConfig] = ContextVar(
    "codec_config",
    default=_DEFAULT_CONFIG,
)


def get_codec_config() -> CodecConfig:
    """Get current codec configuration (thread-local)."""
    return _codec_config.get()


def set_codec_config(config: CodecConfig) -> None:
    """Set codec configuration for current context.

    Only affects the current thread's context. Other threads are unaffected.
    """
    _codec_config.set(config)


def reset_codec_config() -> None:
    """Reset to the module-level default configuration."""
    _codec_config.set(_DEFAULT_CONFIG)


@contextmanager
def codec_config_context(config: CodecConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Restores the previous config even if an exception is raised.

    Example:
        >>> with codec_config_context(CodecConfig(unescape_params=True)):
        ...     message = parse("[CQ:share,title=a&#44;b]")
        >>> # Automatically reset to previous config

    """
    previous = _codec_config.get()
    _codec_config.set(config)
    try:
        yield
    finally:
        _codec_config.set(previous)


__all__ = [
    "CodecConfig",
    "codec_config_context",
    "get_codec_config",
    "reset_codec_config",
    "set_codec_config",
]
