"""Extract plain text from messages.

Example:
    >>> from cqcode import parse, extract_plain_text
    >>> extract_plain_text(parse("hello[CQ:face,id=14]world"))
    'hello world'
"""

from cqcode.message import Message
from cqcode.tokens import TEXT


def extract_plain_text(message: Message) -> str:
    """Join the content of every text segment with single spaces.

    Tag segments contribute nothing. Text segments without a ``"text"``
    value are skipped.
    """
    return " ".join(seg.data[TEXT] for seg in message if seg.kind == TEXT and TEXT in seg.data)
