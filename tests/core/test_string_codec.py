"""String Codec — tests for single-byte text conversion, classifiers and escaping."""

from dotmatrix.core.domain_types import CodecErrorCode
from dotmatrix.core.string_codec import (
    escape_html,
    escape_js,
    escape_sql,
    from_code_points,
    is_ascii,
    is_printable_ascii,
    to_code_points,
)


# ─── to_code_points / from_code_points ───────────────────────────

def test_to_code_points_hello():
    assert list(to_code_points("Hello").value) == [72, 101, 108, 108, 111]


def test_to_code_points_empty():
    assert to_code_points("").value == b""


def test_to_code_points_extended_single_byte_range():
    assert list(to_code_points("\x00\x7f\xff").value) == [0, 127, 255]


def test_to_code_points_fails_whole_call_on_wide_character():
    result = to_code_points("Hello 世界")
    assert not result.ok
    assert result.code == CodecErrorCode.CODE_POINT_OUT_OF_RANGE
    assert result.position == 6


def test_from_code_points():
    assert from_code_points([72, 101, 108, 108, 111]).value == "Hello"
    assert from_code_points([]).value == ""
    assert from_code_points([0, 127, 255]).value == "\x00\x7f\xff"


def test_from_code_points_rejects_out_of_range():
    assert not from_code_points([-1]).ok
    assert not from_code_points([65536]).ok
    assert from_code_points([65, 256]).position == 1


def test_round_trip_single_byte_strings():
    for original in ("Hello World!", "", "\x00\t\n\xa0\xff"):
        assert from_code_points(to_code_points(original).value).value == original


# ─── classifiers ─────────────────────────────────────────────────

def test_is_ascii():
    assert is_ascii("Hello World 123!")
    assert is_ascii("")
    assert is_ascii("\x00\x7f")
    assert not is_ascii("café")
    assert not is_ascii("日本語")
    assert not is_ascii("hello\x80")


def test_is_printable_ascii():
    assert is_printable_ascii("Hello World!")
    assert is_printable_ascii(" ")
    assert is_printable_ascii("~")
    assert is_printable_ascii("")


def test_control_characters_are_not_printable():
    for char in ("\t", "\n", "\x00", "\x1f", "\x7f"):
        assert not is_printable_ascii(char)


# ─── escaping ────────────────────────────────────────────────────

def test_escape_sql():
    assert escape_sql("test") == "test"
    assert escape_sql("it's") == "it''s"
    assert escape_sql("'quoted'") == "''quoted''"
    assert escape_sql("") == ""


def test_escape_html():
    assert escape_html("<div>") == "&lt;div&gt;"
    assert escape_html("a & b") == "a &amp; b"
    assert escape_html('"quoted"') == "&quot;quoted&quot;"
    assert escape_html("it's") == "it&#x27;s"
    assert (
        escape_html('<script>alert("xss")</script>')
        == "&lt;script&gt;alert(&quot;xss&quot;)&lt;/script&gt;"
    )


def test_escape_js():
    assert escape_js("test") == "test"
    assert escape_js('say "hello"') == 'say \\"hello\\"'
    assert escape_js("it's") == "it\\'s"
    assert escape_js("line1\nline2") == "line1\\nline2"
    assert escape_js("tab\there") == "tab\\there"
    assert escape_js("path\\to\\file") == "path\\\\to\\\\file"
