"""Tests for host charset adaptation and legacy emoji conversion."""

import logging

import pytest

from cqcode.charset import convert_emoji, decode, encode
from cqcode.config import CodecConfig, codec_config_context
from cqcode.errors import CharsetError, CQCodeError


class TestEncodeDecode:
    def test_default_charset_is_gb18030(self) -> None:
        assert encode("你好") == "你好".encode("gb18030")
        assert decode("你好".encode("gb18030")) == "你好"

    def test_explicit_charset(self) -> None:
        assert encode("é", "utf-8") == b"\xc3\xa9"
        assert decode(b"\xc3\xa9", "utf-8") == "é"

    def test_charset_from_config(self) -> None:
        with codec_config_context(CodecConfig(charset="utf-8")):
            assert encode("é") == b"\xc3\xa9"

    def test_empty(self) -> None:
        assert encode("") == b""
        assert decode(b"") == ""

    def test_markup_untouched(self) -> None:
        text = "&#91;x&#93;[CQ:face,id=14]"
        assert decode(encode(text)) == text


class TestFailures:
    def test_unknown_charset_on_encode(self) -> None:
        with pytest.raises(CharsetError) as exc_info:
            encode("x", "no-such-charset")
        assert exc_info.value.charset == "no-such-charset"

    def test_unknown_charset_on_decode(self) -> None:
        with pytest.raises(CharsetError):
            decode(b"x", "no-such-charset")

    def test_unencodable_text(self) -> None:
        with pytest.raises(CharsetError, match="cannot encode"):
            encode("你好", "ascii")

    def test_invalid_bytes(self) -> None:
        with pytest.raises(CharsetError, match="offset 1"):
            decode(b"a\xff", "utf-8")

    def test_is_cqcode_error(self) -> None:
        with pytest.raises(CQCodeError):
            encode("你", "ascii")


class TestEmojiConversion:
    def test_emoji_tag(self) -> None:
        assert convert_emoji("hi[CQ:emoji,id=128512]!") == "hi\U0001f600!"

    def test_space_after_comma(self) -> None:
        assert convert_emoji("[CQ:emoji, id=128512]") == "\U0001f600"

    def test_keycap_tag(self) -> None:
        assert convert_emoji("[CQ:emoji,id=10000035]") == "#\ufe0f\u20e3"
        assert convert_emoji("[CQ:emoji,id=10000049]") == "1\ufe0f\u20e3"

    def test_bare_keycap_repaired(self) -> None:
        assert convert_emoji("*\ufe0f") == "*\ufe0f\u20e3"

    def test_complete_keycap_unchanged(self) -> None:
        assert convert_emoji("7\ufe0f\u20e3") == "7\ufe0f\u20e3"

    def test_other_tags_unchanged(self) -> None:
        assert convert_emoji("[CQ:face,id=14]") == "[CQ:face,id=14]"

    def test_out_of_range_id_left_alone(self, caplog: pytest.LogCaptureFixture) -> None:
        tag = "[CQ:emoji,id=99999999999]"
        with caplog.at_level(logging.DEBUG, logger="cqcode"):
            assert convert_emoji(tag) == tag
        assert "out-of-range" in caplog.text

    def test_non_ascii_digits_not_an_id(self) -> None:
        # Arabic-Indic digits spelling 128512
        tag = "[CQ:emoji,id=١٢٨٥١٢]"
        assert convert_emoji(tag) == tag

    @pytest.mark.parametrize(
        "tag",
        ["[CQ:emoji,id=55357]", "[CQ:emoji,id=57343]", "[CQ:emoji,id=10000055296]"],
    )
    def test_surrogate_id_left_alone(self, tag: str, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger="cqcode"):
            assert convert_emoji(tag) == tag
        assert "out-of-range" in caplog.text

    def test_decoded_surrogate_tag_still_encodes(self) -> None:
        data = encode("[CQ:emoji,id=55357]")
        assert encode(decode(data)) == data

    def test_decode_converts_by_default(self) -> None:
        assert decode(encode("[CQ:emoji,id=128512]")) == "\U0001f600"

    def test_decode_conversion_disabled(self) -> None:
        data = encode("[CQ:emoji,id=128512]")
        assert decode(data, convert_unicode_emoji=False) == "[CQ:emoji,id=128512]"
        with codec_config_context(CodecConfig(convert_unicode_emoji=False)):
            assert decode(data) == "[CQ:emoji,id=128512]"
