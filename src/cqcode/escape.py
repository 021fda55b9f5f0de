"""Entity escaping for CQ code text.

Four characters are reserved by the markup: ``&``, ``[``, ``]`` and ``,``.
Inside plain text the first three are replaced by entities; inside tag
parameter values the comma is escaped too.

Both directions are single left-to-right passes and never raise.

Example:
    >>> from cqcode.escape import escape, unescape
    >>> escape("[1,2] & more", escape_comma=True)
    '&#91;1&#44;2&#93; &amp; more'
    >>> unescape("&#91;1&#44;2&#93; &amp; more")
    '[1,2] & more'

Thread Safety:
    Module-level tables are immutable. All functions are pure.

"""

from types import MappingProxyType

# Character -> entity. Comma is only applied when escape_comma is set.
ESCAPE_ENTITIES: MappingProxyType[str, str] = MappingProxyType(
    {
        "&": "&amp;",
        "[": "&#91;",
        "]": "&#93;",
        ",": "&#44;",
    }
)

# Entity -> character (inverse of ESCAPE_ENTITIES)
UNESCAPE_ENTITIES: MappingProxyType[str, str] = MappingProxyType(
    {entity: char for char, entity in ESCAPE_ENTITIES.items()}
)

# Longest entity; bounds the lookahead at each "&"
MAX_ENTITY_LEN = 5

_TEXT_TABLE = str.maketrans({c: e for c, e in ESCAPE_ENTITIES.items() if c != ","})
_PARAM_TABLE = str.maketrans(dict(ESCAPE_ENTITIES))


def escape(text: str, escape_comma: bool = False) -> str:
    """Replace reserved characters with their entities.

    Args:
        text: Raw text
        escape_comma: Also escape ``,`` (required inside tag parameter values)

    Returns:
        Escaped text, never shorter than the input.

    Examples:
        >>> escape("a,b")
        'a,b'
        >>> escape("a,b", escape_comma=True)
        'a&#44;b'
    """
    if not text:
        return ""
    return text.translate(_PARAM_TABLE if escape_comma else _TEXT_TABLE)


def unescape(text: str) -> str:
    """Replace the four known entities with their characters.

    Anything that is not exactly one of ``&amp;``, ``&#91;``, ``&#93;`` or
    ``&#44;`` is copied through verbatim, including unknown and truncated
    entities.

    Examples:
        >>> unescape("&#91;CQ:face&#93;")
        '[CQ:face]'
        >>> unescape("&foo;")
        '&foo;'
    """
    amp = text.find("&")
    if amp == -1:
        return text

    out: list[str] = []
    pos = 0
    text_len = len(text)
    while amp != -1:
        if amp > pos:
            out.append(text[pos:amp])
        char = UNESCAPE_ENTITIES.get(text[amp : amp + MAX_ENTITY_LEN])
        if char is not None:
            out.append(char)
            pos = amp + MAX_ENTITY_LEN
        else:
            out.append("&")
            pos = amp + 1
        amp = text.find("&", pos)

    if pos < text_len:
        out.append(text[pos:])
    return "".join(out)


__all__ = [
    "ESCAPE_ENTITIES",
    "MAX_ENTITY_LEN",
    "UNESCAPE_ENTITIES",
    "escape",
    "unescape",
]
