"""cqcode: CQ code markup codec for Python.

Converts text with inline ``[CQ:type,key=value,...]`` tags into an ordered
sequence of typed segments and back. Parsing is a hand-written linear state
machine that never raises: malformed tags degrade to literal text.

Quick Start:
    >>> from cqcode import parse, dumps
    >>> message = parse("hello[CQ:face,id=14]")
    >>> message[1]
    Segment(kind='face', data={'id': '14'})
    >>> dumps(message)
    'hello[CQ:face,id=14]'

    >>> # Or use the high-level CQCode class
    >>> from cqcode import CQCode
    >>> codec = CQCode(sort_params=True)
    >>> codec("a[CQ:at,qq=1,all=0]")
    'a[CQ:at,all=0,qq=1]'

Installation:
    pip install cqcode               # zero runtime dependencies
"""

from collections.abc import Iterable

from cqcode.charset import convert_emoji, decode, encode
from cqcode.config import (
    CodecConfig,
    codec_config_context,
    get_codec_config,
    reset_codec_config,
    set_codec_config,
)
from cqcode.delivery import MessageSender, Target, send
from cqcode.errors import CharsetError, CQCodeError, DeliveryError
from cqcode.escape import escape, unescape
from cqcode.lexer import Lexer
from cqcode.message import Message, Segment
from cqcode.parser import Parser
from cqcode.profiling import ParseAccumulator, get_parse_accumulator, profiled_parse
from cqcode.reduce import reduce as normalize
from cqcode.serialization import dumps, from_json, from_list, to_json, to_list
from cqcode.text import extract_plain_text
from cqcode.tokens import TEXT, Chunk

__version__ = "0.1.0"


def parse(source: str) -> Message:
    """Parse CQ code text into a Message.

    Uses the active CodecConfig (see ``codec_config_context``).

    Args:
        source: CQ code text; any string is valid input

    Returns:
        New Message; empty for an empty source

    Example:
        >>> [seg.kind for seg in parse("a[CQ:x,]b[CQ:image,file=1.jpg]")]
        ['text', 'image']
    """
    return Parser(source).parse()


class CQCode:
    """High-level codec combining parser, normalizer and serializer.

    Usage:
        >>> codec = CQCode(unescape_params=True)
        >>> codec.parse("[CQ:share,title=a&#44;b]")[0].data
        {'title': 'a,b'}
        >>> codec("x[CQ:face,id=1]")
        'x[CQ:face,id=1]'

    Thread Safety:
        Sets config via ContextVar for the duration of each call. Safe to use
        multiple CQCode instances concurrently from different threads.

    """

    __slots__ = ("_config",)

    def __init__(
        self,
        *,
        unescape_params: bool = False,
        allow_empty_values: bool = False,
        sort_params: bool = False,
        charset: str = "gb18030",
        convert_unicode_emoji: bool = True,
    ) -> None:
        self._config = CodecConfig(
            unescape_params=unescape_params,
            allow_empty_values=allow_empty_values,
            sort_params=sort_params,
            charset=charset,
            convert_unicode_emoji=convert_unicode_emoji,
        )

    @property
    def config(self) -> CodecConfig:
        return self._config

    def __call__(self, source: str) -> str:
        """Parse, normalize and re-serialize ``source`` to canonical text."""
        with codec_config_context(self._config):
            return dumps(normalize(Parser(source).parse()))

    def parse(self, source: str) -> Message:
        """Parse CQ code text into a Message."""
        with codec_config_context(self._config):
            return Parser(source).parse()

    def parse_many(self, sources: Iterable[str]) -> list[Message]:
        """Parse multiple sources, setting the config once for the batch."""
        with codec_config_context(self._config):
            return [Parser(source).parse() for source in sources]

    def dumps(self, message: Message) -> str:
        """Render a Message as CQ code text."""
        with codec_config_context(self._config):
            return dumps(message)

    def decode(self, data: bytes) -> Message:
        """Decode host bytes and parse them."""
        with codec_config_context(self._config):
            return Parser(decode(data)).parse()

    def encode(self, message: Message) -> bytes:
        """Serialize a Message and encode it for the host."""
        with codec_config_context(self._config):
            return encode(dumps(message))


__all__ = [  # noqa: RUF022 - grouped by category for maintainability
    # Version
    "__version__",
    # Core API
    "parse",
    "dumps",
    "normalize",
    "extract_plain_text",
    "escape",
    "unescape",
    # Model
    "Message",
    "Segment",
    "TEXT",
    # Parser components
    "Chunk",
    "Lexer",
    "Parser",
    # Array form
    "to_list",
    "from_list",
    "to_json",
    "from_json",
    # Host collaborators
    "encode",
    "decode",
    "convert_emoji",
    "MessageSender",
    "Target",
    "send",
    # Errors
    "CQCodeError",
    "CharsetError",
    "DeliveryError",
    # Profiling
    "ParseAccumulator",
    "profiled_parse",
    "get_parse_accumulator",
    # Configuration (ContextVar-based)
    "CodecConfig",
    "get_codec_config",
    "set_codec_config",
    "reset_codec_config",
    "codec_config_context",
    # High-level
    "CQCode",
]
