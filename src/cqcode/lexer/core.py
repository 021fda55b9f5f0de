"""State-machine lexer with O(n) guaranteed performance.

Scans the source once, left to right. Literal text is accumulated as a
pending span; each ``[CQ:`` candidate runs through the tag automaton. A
well-formed tag flushes the pending span and is emitted as its own chunk. An
ill-formed tag is abandoned ("panic"): its characters stay in the pending
span and scanning resumes at the point of failure.

No regex, no recursion, no backtracking past the failure point.

Thread Safety:
Lexer instances are single-use. Create one per source string.
All state is instance-local; no shared mutable state.

"""

from __future__ import annotations

from collections.abc import Iterator

from cqcode.config import get_codec_config
from cqcode.escape import unescape
from cqcode.lexer.modes import (
    KEY_TERMINATORS,
    TAG_PREFIX,
    TAG_PREFIX_LEN,
    TYPE_CHARS,
    VALUE_TERMINATORS,
    TagState,
)
from cqcode.tokens import TEXT, Chunk
from cqcode.utils.logger import get_logger

logger = get_logger(__name__)


class Lexer:
    """Tokenizer turning CQ code text into chunks.

    Usage:
        >>> lexer = Lexer("hi[CQ:face,id=14]")
        >>> for chunk in lexer.tokenize():
        ...     print(chunk)
        Chunk(text, 'hi', 0:2)
        Chunk(face, {'id': '14'}, 2:17)

    Thread Safety:
        Lexer instances are single-use. Create one per source string.

    """

    __slots__ = (
        "_source",
        "_source_len",
        "_scan_pos",  # Next position to search for "["
        "_literal_start",  # Start of the pending literal span
        "_unescape_params",
        "_allow_empty_values",
        "_abandoned_tags",  # Tag candidates left as literal text
    )

    def __init__(
        self,
        source: str,
        *,
        unescape_params: bool | None = None,
        allow_empty_values: bool | None = None,
    ) -> None:
        """Initialize lexer with source text.

        Args:
            source: CQ code text
            unescape_params: Unescape tag parameter values (defaults to the
                active CodecConfig)
            allow_empty_values: Accept empty parameter values (defaults to the
                active CodecConfig)
        """
        config = get_codec_config()
        self._source = source
        self._source_len = len(source)
        self._scan_pos = 0
        self._literal_start = 0
        self._abandoned_tags = 0
        self._unescape_params = (
            config.unescape_params if unescape_params is None else unescape_params
        )
        self._allow_empty_values = (
            config.allow_empty_values if allow_empty_values is None else allow_empty_values
        )

    @property
    def abandoned_tags(self) -> int:
        """Number of ill-formed tags kept as literal text so far."""
        return self._abandoned_tags

    def tokenize(self) -> Iterator[Chunk]:
        """Tokenize source into a chunk stream.

        Yields:
            Chunk objects in source order. Text chunks are never empty and
            never adjacent to each other.

        Complexity: O(n) where n = len(source)
        """
        source = self._source
        source_len = self._source_len

        while True:
            bracket = source.find("[", self._scan_pos)
            if bracket == -1 or source_len - bracket < TAG_PREFIX_LEN:
                break
            if not source.startswith(TAG_PREFIX, bracket):
                self._scan_pos = bracket + 1
                continue

            chunk, pos = self._scan_tag(bracket)
            if chunk is None:
                # Panic: the attempt stays in the pending literal span
                self._abandoned_tags += 1
                self._scan_pos = pos
                continue

            if bracket > self._literal_start:
                yield self._text_chunk(self._literal_start, bracket)
            yield chunk
            self._literal_start = self._scan_pos = pos

        if self._literal_start < source_len:
            yield self._text_chunk(self._literal_start, source_len)
        self._literal_start = self._scan_pos = source_len

    # =========================================================================
    # Tag automaton
    # =========================================================================

    def _scan_tag(self, bracket: int) -> tuple[Chunk | None, int]:
        """Run the tag automaton on the tag starting at ``bracket``.

        Returns:
            ``(chunk, end)`` for a well-formed tag, where ``end`` is just past
            the closing ``]``; ``(None, failure_pos)`` for an ill-formed one.
        """
        source = self._source
        source_len = self._source_len
        type_start = pos = bracket + TAG_PREFIX_LEN

        state = TagState.TYPE
        kind = ""
        params: list[tuple[str, str]] = []
        key_start = key_end = value_start = 0

        while pos < source_len:
            char = source[pos]

            if state is TagState.TYPE:
                if char not in TYPE_CHARS:
                    break
                state = TagState.TYPE_TAIL

            elif state is TagState.TYPE_TAIL:
                if char in TYPE_CHARS:
                    pass
                elif char == ",":
                    kind = source[type_start:pos]
                    state = TagState.PARAM_KEY
                elif char == "]":
                    kind = source[type_start:pos]
                    return Chunk(kind, (), bracket, pos + 1), pos + 1
                else:
                    break

            elif state is TagState.PARAM_KEY:
                if char == " ":
                    pass
                elif char in KEY_TERMINATORS:
                    break  # empty key
                else:
                    key_start = pos
                    state = TagState.PARAM_KEY_TAIL

            elif state is TagState.PARAM_KEY_TAIL:
                if char == " ":
                    key_end = pos
                    state = TagState.PARAM_KEY_TRAILING
                elif char == "=":
                    key_end = pos
                    value_start = pos + 1
                    state = TagState.PARAM_VALUE
                elif char in KEY_TERMINATORS:
                    break

            elif state is TagState.PARAM_KEY_TRAILING:
                if char == "=":
                    value_start = pos + 1
                    state = TagState.PARAM_VALUE
                elif char != " ":
                    break

            elif char in VALUE_TERMINATORS:  # PARAM_VALUE
                if pos == value_start and not self._allow_empty_values:
                    break  # empty value
                value = source[value_start:pos]
                if self._unescape_params:
                    value = unescape(value)
                params.append((source[key_start:key_end], value))
                if char == "]":
                    return Chunk(kind, tuple(params), bracket, pos + 1), pos + 1
                state = TagState.PARAM_KEY

            pos += 1

        logger.debug(
            "Abandoned tag at offset %d (state %s, failed at offset %d)",
            bracket,
            state.name,
            pos,
        )
        return None, pos

    def _text_chunk(self, start: int, end: int) -> Chunk:
        """Create a text chunk for the literal span ``source[start:end]``."""
        return Chunk(TEXT, ((TEXT, unescape(self._source[start:end])),), start, end)
