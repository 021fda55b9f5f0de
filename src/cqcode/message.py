"""Segment model for cqcode messages.

A Message is an ordered sequence of Segments. Each segment has a kind
(``"text"`` or a tag type) and a table of string parameters.

Segment:
    kind="text"  -> data={"text": "<unescaped content>"}
    kind="<tag>" -> data={"<key>": "<value>", ...}

Ownership:
Messages own their segments. Segments passed to a Message are copied, so no
segment is ever shared between two messages.

Thread Safety:
Distinct messages may be read from different threads. A single message must
not be mutated (append, reduce) while another thread reads it.

"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, overload

from cqcode.tokens import TEXT

if TYPE_CHECKING:
    from cqcode.delivery import MessageSender, Target


@dataclass(slots=True)
class Segment:
    """One unit of a message: literal text or one tag occurrence.

    Attributes:
        kind: ``"text"`` for plain text, otherwise the tag type
        data: Parameter table. Keys are unique; the last write wins.

    """

    kind: str
    data: dict[str, str] = field(default_factory=dict)

    @classmethod
    def text(cls, content: str) -> Segment:
        """Create a plain text segment."""
        return cls(TEXT, {TEXT: content})

    @classmethod
    def of(cls, kind: str, **data: str) -> Segment:
        """Create a tag segment from keyword parameters.

        Example:
            >>> Segment.of("face", id="14")
            Segment(kind='face', data={'id': '14'})
        """
        return cls(kind, dict(data))

    @property
    def is_text(self) -> bool:
        return self.kind == TEXT

    def copy(self) -> Segment:
        """Return a copy that shares no mutable state with this segment."""
        return Segment(self.kind, dict(self.data))


class Message:
    """Ordered, owning sequence of segments.

    Usage:
        >>> message = Message.from_string("hi[CQ:face,id=14]")
        >>> len(message)
        2
        >>> message[1]
        Segment(kind='face', data={'id': '14'})
        >>> str(message)
        'hi[CQ:face,id=14]'

    """

    __slots__ = ("_segments",)

    def __init__(self, segments: Iterable[Segment] = ()) -> None:
        self._segments: list[Segment] = [seg.copy() for seg in segments]

    @classmethod
    def from_string(cls, source: str) -> Message:
        """Parse CQ code text into a message (see ``cqcode.parse``)."""
        from cqcode.parser import Parser

        return Parser(source).parse()

    @classmethod
    def _adopt(cls, segments: list[Segment]) -> Message:
        """Wrap freshly built segments without copying them."""
        message = cls()
        message._segments = segments
        return message

    # =========================================================================
    # Sequence protocol
    # =========================================================================

    def __len__(self) -> int:
        return len(self._segments)

    def __bool__(self) -> bool:
        return bool(self._segments)

    def __iter__(self) -> Iterator[Segment]:
        return iter(self._segments)

    @overload
    def __getitem__(self, index: int) -> Segment: ...

    @overload
    def __getitem__(self, index: slice) -> Message: ...

    def __getitem__(self, index: int | slice) -> Segment | Message:
        if isinstance(index, slice):
            return Message(self._segments[index])
        return self._segments[index]

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Message):
            return self._segments == other._segments
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Message({self._segments!r})"

    def __str__(self) -> str:
        from cqcode.serialization import dumps

        return dumps(self)

    def __add__(self, other: Message | Segment | str) -> Message:
        if not isinstance(other, Message | Segment | str):
            return NotImplemented
        result = self.copy()
        result._concat(other)
        return result

    def __iadd__(self, other: Message | Segment | str) -> Message:
        if not isinstance(other, Message | Segment | str):
            return NotImplemented
        self._concat(other)
        return self

    def _concat(self, other: Message | Segment | str) -> None:
        if isinstance(other, Message):
            self.extend(other)
        elif isinstance(other, Segment):
            self.append(other)
        else:
            self.append(Segment.text(other))

    # =========================================================================
    # Mutation
    # =========================================================================

    def append(self, segment: Segment) -> None:
        """Append a copy of ``segment``."""
        self._segments.append(segment.copy())

    def extend(self, segments: Iterable[Segment]) -> None:
        """Append copies of ``segments`` in order."""
        self._segments.extend(seg.copy() for seg in segments)

    def clear(self) -> None:
        self._segments.clear()

    def copy(self) -> Message:
        return Message(self._segments)

    def reduce(self) -> None:
        """Normalize in place: merge adjacent text and drop a lone empty text."""
        from cqcode.reduce import reduce

        self._segments = reduce(self)._segments

    # =========================================================================
    # Views and delivery
    # =========================================================================

    def extract_plain_text(self) -> str:
        """Join the content of all text segments with single spaces."""
        from cqcode.text import extract_plain_text

        return extract_plain_text(self)

    def send(self, target: Target, sender: MessageSender) -> int:
        """Hand this message to a delivery collaborator.

        Returns:
            Message id assigned by the sender

        Raises:
            DeliveryError: If the sender reports a failure
        """
        from cqcode.delivery import send

        return send(self, target, sender)


__all__ = [
    "Message",
    "Segment",
]
