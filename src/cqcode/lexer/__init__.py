"""Hand-written state-machine lexer for CQ code text.

The lexer scans the source once and yields chunks: literal text spans and
well-formed ``[CQ:type,key=value,...]`` tags. Malformed tags never raise;
they degrade to literal text.

Architecture:
lexer/
├── __init__.py          # Re-exports Lexer, TagState
├── core.py              # Lexer class (literal scanning + tag automaton)
└── modes.py             # TagState enum, character sets

Usage:
    >>> from cqcode.lexer import Lexer
    >>> for chunk in Lexer("a[CQ:at,qq=10001]b").tokenize():
    ...     print(chunk)
Chunk(text, 'a', 0:1)
Chunk(at, {'qq': '10001'}, 1:17)
Chunk(text, 'b', 17:18)

"""

from cqcode.lexer.core import Lexer
from cqcode.lexer.modes import TagState

__all__ = ["Lexer", "TagState"]
