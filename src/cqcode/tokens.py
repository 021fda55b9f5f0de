"""Chunk definition for the cqcode lexer.

The lexer produces a stream of Chunk objects that the parser turns into
message segments. A chunk is either a literal text span (kind ``"text"``) or
one well-formed tag with its parameters in source order.

Thread Safety:
Chunk is frozen (immutable) and safe to share across threads.

"""

from dataclasses import dataclass

# Kind of literal text chunks and segments
TEXT = "text"


@dataclass(frozen=True, slots=True)
class Chunk:
    """A pre-segment produced by the lexer.

    Attributes:
        kind: ``"text"`` for literal spans, otherwise the tag type
        params: Ordered ``(key, value)`` pairs. Text chunks carry the single
            pair ``("text", unescaped_content)``. Duplicate keys are kept here;
            they collapse when the segment is built.
        start: Absolute start offset of the span in source
        end: Absolute end offset of the span in source (exclusive)

    """

    kind: str
    params: tuple[tuple[str, str], ...]
    start: int
    end: int

    @property
    def is_text(self) -> bool:
        return self.kind == TEXT

    def __repr__(self) -> str:
        """Compact repr for debugging."""
        if self.is_text:
            val = self.params[0][1] if self.params else ""
            if len(val) > 20:
                val = val[:17] + "..."
            return f"Chunk(text, {val!r}, {self.start}:{self.end})"
        return f"Chunk({self.kind}, {dict(self.params)!r}, {self.start}:{self.end})"
