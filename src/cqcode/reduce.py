"""Message normalization.

Restores the canonical, minimal segment sequence:
- adjacent text segments that both carry a ``"text"`` value are merged
- a message left with a single empty text segment becomes empty

Built as one forward pass into a new segment list; the input is not touched.

Example:
    >>> from cqcode.message import Message, Segment
    >>> reduce(Message([Segment.text("a"), Segment.text("b"), Segment.of("face", id="1")]))
    Message([Segment(kind='text', data={'text': 'ab'}), Segment(kind='face', data={'id': '1'})])

"""

from cqcode.message import Message, Segment
from cqcode.tokens import TEXT


def reduce(message: Message) -> Message:
    """Return a normalized copy of ``message``. Idempotent."""
    out: list[Segment] = []
    for seg in message:
        if out and _mergeable(seg) and _mergeable(out[-1]):
            last = out[-1]
            last.data[TEXT] = last.data[TEXT] + seg.data[TEXT]
        else:
            out.append(seg.copy())

    if len(out) == 1 and out[0].kind == TEXT and not out[0].data.get(TEXT):
        out.clear()
    return Message._adopt(out)


def _mergeable(seg: Segment) -> bool:
    return seg.kind == TEXT and TEXT in seg.data
