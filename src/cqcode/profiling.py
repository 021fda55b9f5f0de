"""ParseAccumulator: opt-in profiling for CQ code parsing.

Collects, across every parse inside a ``profiled_parse()`` block:
- how much source text was scanned
- how many text and tag segments came out
- how many ``[CQ:`` candidates were abandoned as ill-formed

A high abandoned-tag ratio usually means the host is sending markup the
grammar rejects (empty values, keys with spaces) rather than plain text.

Zero overhead when disabled (get_parse_accumulator() returns None).

Example:
    from cqcode import parse
    from cqcode.profiling import profiled_parse

    with profiled_parse() as metrics:
        parse("hi[CQ:face,id=14][CQ:at,qq=]")

    print(metrics.summary())
    # {"total_ms": 0.1, "parse_calls": 1, "source_length": 28,
    #  "text_segments": 2, "tag_segments": 1, "abandoned_tags": 1,
    #  "abandon_rate": 0.5}

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar, Token
from dataclasses import dataclass, field
from time import perf_counter
from typing import Any


@dataclass
class ParseAccumulator:
    """Accumulated metrics during parsing.

    Attributes:
        start_time: Profiling start timestamp.
        parse_calls: Number of parses recorded.
        source_length: Total length of parsed sources.
        text_segments: Text segments produced.
        tag_segments: Tag segments produced.
        abandoned_tags: Tag candidates that failed the tag grammar and were
            kept as literal text.

    """

    start_time: float = field(default_factory=perf_counter)
    parse_calls: int = 0
    source_length: int = 0
    text_segments: int = 0
    tag_segments: int = 0
    abandoned_tags: int = 0

    def record_parse(
        self,
        source_length: int,
        text_segments: int,
        tag_segments: int,
        abandoned_tags: int,
    ) -> None:
        """Record one parse."""
        self.parse_calls += 1
        self.source_length += source_length
        self.text_segments += text_segments
        self.tag_segments += tag_segments
        self.abandoned_tags += abandoned_tags

    @property
    def segment_count(self) -> int:
        return self.text_segments + self.tag_segments

    @property
    def abandon_rate(self) -> float:
        """Share of ``[CQ:`` candidates that were abandoned (0.0 when none seen)."""
        candidates = self.tag_segments + self.abandoned_tags
        return self.abandoned_tags / candidates if candidates else 0.0

    @property
    def total_duration_ms(self) -> float:
        return (perf_counter() - self.start_time) * 1000

    def summary(self) -> dict[str, Any]:
        """Get summary of parse metrics."""
        return {
            "total_ms": round(self.total_duration_ms, 2),
            "parse_calls": self.parse_calls,
            "source_length": self.source_length,
            "text_segments": self.text_segments,
            "tag_segments": self.tag_segments,
            "abandoned_tags": self.abandoned_tags,
            "abandon_rate": round(self.abandon_rate, 4),
        }


_accumulator: ContextVar[ParseAccumulator | None] = ContextVar(
    "parse_accumulator",
    default=None,
)


def get_parse_accumulator() -> ParseAccumulator | None:
    """Get current accumulator (None if profiling disabled)."""
    return _accumulator.get()


@contextmanager
def profiled_parse() -> Iterator[ParseAccumulator]:
    """Context manager for profiled parsing.

    Yields:
        ParseAccumulator populated by every parse in the with block.

    """
    acc = ParseAccumulator()
    token: Token[ParseAccumulator | None] = _accumulator.set(acc)
    try:
        yield acc
    finally:
        _accumulator.reset(token)
