"""Host charset adaptation.

Legacy bot hosts exchange text in a multi-byte charset (GB18030 by default)
rather than UTF-8. These helpers convert at the host boundary; everything
inside cqcode works on already-decoded ``str``.

Decoding can also repair legacy emoji markup: hosts send emoji as
``[CQ:emoji,id=<codepoint>]`` tags, with keycaps encoded as ``100000`` followed
by the key's code point, and sometimes drop the U+20E3 combining keycap.

Example:
    >>> from cqcode.charset import decode, encode
    >>> decode(encode("你好[CQ:emoji,id=128512]"))
    '你好😀'

Thread Safety:
    All functions are pure.

"""

import re

from cqcode.config import get_codec_config
from cqcode.errors import CharsetError
from cqcode.utils.logger import get_logger

logger = get_logger(__name__)

_EMOJI_TAG = re.compile(r"\[CQ:emoji,\s*id=([0-9]+)\]")
_KEYCAP = re.compile("([#*0-9]\ufe0f)(\u20e3)?")

KEYCAP_PREFIX = "100000"
VARIATION_SELECTOR_16 = "\ufe0f"
COMBINING_KEYCAP = "\u20e3"
SURROGATE_FIRST = 0xD800
SURROGATE_LAST = 0xDFFF


def encode(text: str, charset: str | None = None) -> bytes:
    """Encode text for the host.

    Args:
        text: Text to encode
        charset: Target charset (defaults to the active CodecConfig)

    Raises:
        CharsetError: If the charset is unknown or cannot represent the text
    """
    charset = charset or get_codec_config().charset
    try:
        return text.encode(charset)
    except LookupError as e:
        raise CharsetError(charset, "unknown charset") from e
    except UnicodeEncodeError as e:
        raise CharsetError(charset, f"cannot encode {e.object[e.start : e.end]!r}") from e


def decode(
    data: bytes,
    charset: str | None = None,
    *,
    convert_unicode_emoji: bool | None = None,
) -> str:
    """Decode host bytes into text.

    Args:
        data: Bytes received from the host
        charset: Source charset (defaults to the active CodecConfig)
        convert_unicode_emoji: Rewrite legacy emoji tags (defaults to the
            active CodecConfig)

    Raises:
        CharsetError: If the charset is unknown or the bytes are invalid
    """
    config = get_codec_config()
    charset = charset or config.charset
    if convert_unicode_emoji is None:
        convert_unicode_emoji = config.convert_unicode_emoji

    try:
        text = data.decode(charset)
    except LookupError as e:
        raise CharsetError(charset, "unknown charset") from e
    except UnicodeDecodeError as e:
        raise CharsetError(charset, f"invalid byte sequence at offset {e.start}") from e

    if convert_unicode_emoji:
        text = convert_emoji(text)
    return text


def convert_emoji(text: str) -> str:
    """Replace legacy emoji tags with Unicode and repair keycap sequences.

    Examples:
        >>> convert_emoji("[CQ:emoji,id=128512]")
        '😀'
        >>> convert_emoji("[CQ:emoji,id=10000035]") == "#\\ufe0f\\u20e3"
        True
    """
    text = _EMOJI_TAG.sub(_emoji_from_tag, text)
    return _KEYCAP.sub(lambda m: m.group(1) + COMBINING_KEYCAP, text)


def _emoji_from_tag(match: re.Match[str]) -> str:
    id_str = match.group(1)
    is_keycap = id_str.startswith(KEYCAP_PREFIX) and len(id_str) > len(KEYCAP_PREFIX)
    try:
        char = _scalar_value(int(id_str[len(KEYCAP_PREFIX) :] if is_keycap else id_str))
    except (ValueError, OverflowError):
        logger.debug("Leaving emoji tag with out-of-range id %s", id_str)
        return match.group(0)
    if is_keycap:
        return char + VARIATION_SELECTOR_16 + COMBINING_KEYCAP
    return char


def _scalar_value(code_point: int) -> str:
    # Surrogates are valid for chr() but cannot be encoded for the host
    if SURROGATE_FIRST <= code_point <= SURROGATE_LAST:
        msg = f"surrogate code point {code_point:#x}"
        raise ValueError(msg)
    return chr(code_point)


__all__ = [
    "convert_emoji",
    "decode",
    "encode",
]
