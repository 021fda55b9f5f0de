"""Tag automaton states and character sets.

This module defines the finite state machine states used while scanning the
body of a ``[CQ:...]`` tag, and the constant sets the states classify against.
"""

from __future__ import annotations

import string
from enum import Enum, auto


class TagState(Enum):
    """States of the tag automaton.

    Entered right after the ``[CQ:`` prefix:
    - TYPE: First character of the type name (must be alphanumeric)
    - TYPE_TAIL: Rest of the type name; ``,`` starts a parameter, ``]`` closes
    - PARAM_KEY: Leading spaces before a key
    - PARAM_KEY_TAIL: Key characters; space ends the key, ``=`` starts the value
    - PARAM_KEY_TRAILING: Spaces between the key and ``=``
    - PARAM_VALUE: Value characters up to ``,`` or ``]``

    """

    TYPE = auto()
    TYPE_TAIL = auto()
    PARAM_KEY = auto()
    PARAM_KEY_TAIL = auto()
    PARAM_KEY_TRAILING = auto()
    PARAM_VALUE = auto()


TAG_PREFIX = "[CQ:"
TAG_PREFIX_LEN = len(TAG_PREFIX)

# ASCII letters and digits only
TYPE_CHARS: frozenset[str] = frozenset(string.ascii_letters + string.digits)

# Characters that can never appear inside a key
KEY_TERMINATORS: frozenset[str] = frozenset("],=")

# Characters that end a parameter value
VALUE_TERMINATORS: frozenset[str] = frozenset("],")
