"""Tests for the tag automaton: well-formed tags and their chunks."""

import pytest

from cqcode.lexer import Lexer
from cqcode.tokens import TEXT, Chunk


def _chunks(source: str, **kwargs: bool) -> list[Chunk]:
    return list(Lexer(source, **kwargs).tokenize())


def _shape(source: str, **kwargs: bool) -> list[tuple[str, tuple[tuple[str, str], ...]]]:
    return [(c.kind, c.params) for c in _chunks(source, **kwargs)]


class TestGoldenExample:
    """The reference message tokenizes into five chunks."""

    SOURCE = (
        "test_text[CQ:what][CQ:where,parama=1234,paramb=123]"
        "[CQ:why,param=1231234]test_text"
    )

    def test_shape(self) -> None:
        assert _shape(self.SOURCE) == [
            (TEXT, ((TEXT, "test_text"),)),
            ("what", ()),
            ("where", (("parama", "1234"), ("paramb", "123"))),
            ("why", (("param", "1231234"),)),
            (TEXT, ((TEXT, "test_text"),)),
        ]

    def test_offsets_cover_source(self) -> None:
        chunks = _chunks(self.SOURCE)
        assert chunks[0].start == 0
        assert chunks[-1].end == len(self.SOURCE)
        for prev, nxt in zip(chunks, chunks[1:]):
            assert prev.end == nxt.start

    def test_tag_offsets(self) -> None:
        chunks = _chunks(self.SOURCE)
        assert self.SOURCE[chunks[1].start : chunks[1].end] == "[CQ:what]"


class TestTypeName:
    def test_alphanumeric_type(self) -> None:
        assert _shape("[CQ:face2]") == [("face2", ())]

    def test_digit_only_type(self) -> None:
        assert _shape("[CQ:123]") == [("123", ())]

    def test_empty_type_is_text(self) -> None:
        assert _shape("[CQ:]") == [(TEXT, ((TEXT, "[CQ:]"),))]

    @pytest.mark.parametrize("source", ["[CQ:fa-ce]", "[CQ:fa ce]", "[CQ:fa_ce]", "[CQ:表情]"])
    def test_non_alnum_type_is_text(self, source: str) -> None:
        assert _shape(source) == [(TEXT, ((TEXT, source),))]

    def test_prefix_is_case_sensitive(self) -> None:
        assert _shape("[cq:face]") == [(TEXT, ((TEXT, "[cq:face]"),))]


class TestParameters:
    def test_single_param(self) -> None:
        assert _shape("[CQ:face,id=14]") == [("face", (("id", "14"),))]

    def test_key_spaces_trimmed(self) -> None:
        assert _shape("[CQ:at,  qq  =10001]") == [("at", (("qq", "10001"),))]

    def test_value_spaces_kept(self) -> None:
        assert _shape("[CQ:share,title= a b ]") == [("share", (("title", " a b "),))]

    def test_value_may_contain_equals_and_brackets(self) -> None:
        assert _shape("[CQ:x,url=http://a/?b=c[d]") == [("x", (("url", "http://a/?b=c[d"),))]

    def test_duplicate_keys_kept_in_order(self) -> None:
        assert _shape("[CQ:at,qq=1,qq=2]") == [("at", (("qq", "1"), ("qq", "2")))]

    def test_key_named_text(self) -> None:
        assert _shape("[CQ:x,text=hi]") == [("x", ((TEXT, "hi"),))]

    def test_values_not_unescaped_by_default(self) -> None:
        assert _shape("[CQ:x,v=a&#44;b&amp;c]") == [("x", (("v", "a&#44;b&amp;c"),))]

    def test_values_unescaped_when_enabled(self) -> None:
        assert _shape("[CQ:x,v=a&#44;b&amp;c]", unescape_params=True) == [
            ("x", (("v", "a,b&c"),))
        ]

    def test_keys_never_unescaped(self) -> None:
        assert _shape("[CQ:x,&amp;=1]", unescape_params=True) == [("x", (("&amp;", "1"),))]

    def test_empty_value_allowed_when_enabled(self) -> None:
        assert _shape("[CQ:x,a=,b=2]", allow_empty_values=True) == [
            ("x", (("a", ""), ("b", "2")))
        ]


class TestTextSpans:
    def test_empty_source(self) -> None:
        assert _chunks("") == []

    def test_plain_text(self) -> None:
        assert _shape("just text") == [(TEXT, ((TEXT, "just text"),))]

    def test_text_is_unescaped(self) -> None:
        assert _shape("&#91;not a tag&#93; &amp;") == [(TEXT, ((TEXT, "[not a tag] &"),))]

    def test_escaped_tag_stays_text(self) -> None:
        assert _shape("&#91;CQ:face,id=1&#93;") == [(TEXT, ((TEXT, "[CQ:face,id=1]"),))]

    def test_text_between_tags(self) -> None:
        assert _shape("[CQ:a]mid[CQ:b]") == [
            ("a", ()),
            (TEXT, ((TEXT, "mid"),)),
            ("b", ()),
        ]

    def test_adjacent_tags_have_no_text_between(self) -> None:
        assert [c.kind for c in _chunks("[CQ:a][CQ:b]")] == ["a", "b"]

    def test_lone_bracket_near_end(self) -> None:
        assert _shape("ab[CQ") == [(TEXT, ((TEXT, "ab[CQ"),))]

    def test_other_brackets_are_text(self) -> None:
        assert _shape("[x][CQ:a]") == [(TEXT, ((TEXT, "[x]"),)), ("a", ())]
