"""Message assembly from lexer chunks.

Each chunk becomes one segment, in encounter order. Duplicate parameter keys
inside one tag collapse with last-write-wins semantics. No validation happens
here beyond what the lexer already guarantees.

Thread Safety:
Parser instances are single-use. Create one per source string.

"""

from __future__ import annotations

from cqcode.lexer import Lexer
from cqcode.message import Message, Segment
from cqcode.profiling import get_parse_accumulator


class Parser:
    """Builds a Message from CQ code text.

    Usage:
        >>> parser = Parser("[CQ:at,qq=1,qq=2]")
        >>> parser.parse()[0].data
        {'qq': '2'}

    """

    __slots__ = ("_source", "_lexer")

    def __init__(
        self,
        source: str,
        *,
        unescape_params: bool | None = None,
        allow_empty_values: bool | None = None,
    ) -> None:
        """Initialize parser with source text.

        Args:
            source: CQ code text
            unescape_params: Forwarded to the Lexer
            allow_empty_values: Forwarded to the Lexer
        """
        self._source = source
        self._lexer = Lexer(
            source,
            unescape_params=unescape_params,
            allow_empty_values=allow_empty_values,
        )

    def parse(self) -> Message:
        """Parse the source into a new Message."""
        segments = [Segment(chunk.kind, dict(chunk.params)) for chunk in self._lexer.tokenize()]

        acc = get_parse_accumulator()
        if acc is not None:
            acc.record_parse(
                source_length=len(self._source),
                text_segments=sum(1 for seg in segments if seg.is_text),
                tag_segments=sum(1 for seg in segments if not seg.is_text),
                abandoned_tags=self._lexer.abandoned_tags,
            )

        return Message._adopt(segments)
