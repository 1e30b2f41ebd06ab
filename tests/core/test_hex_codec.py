"""Hex Codec — tests for encoding, decoding, comparison and hex transforms.

Tests cover:
    - encode variants (case, spacing, empty input)
    - decode trimming, length and character errors
    - constant-time comparisons (case, whitespace, length)
    - byte_length, pad_to_byte_length, xor_hex, case transforms
    - string composition and hexdump rendering
"""

from dotmatrix.core import hex_codec
from dotmatrix.core.domain_types import CodecErrorCode

HELLO = [72, 101, 108, 108, 111]


# ─── encode ──────────────────────────────────────────────────────

def test_encode_hello():
    assert hex_codec.encode(HELLO) == "48656c6c6f"


def test_encode_accepts_bytes():
    assert hex_codec.encode(b"Hello") == "48656c6c6f"


def test_encode_edges_and_empty():
    assert hex_codec.encode([0, 255]) == "00ff"
    assert hex_codec.encode([42]) == "2a"
    assert hex_codec.encode([]) == ""


def test_encode_uppercase():
    assert hex_codec.encode_uppercase(HELLO) == "48656C6C6F"


def test_encode_spaced():
    assert hex_codec.encode_spaced(HELLO) == "48 65 6c 6c 6f"
    assert hex_codec.encode_spaced([42]) == "2a"
    assert hex_codec.encode_spaced([]) == ""


def test_encode_spaced_uppercase():
    assert hex_codec.encode_spaced_uppercase(HELLO) == "48 65 6C 6C 6F"


# ─── decode ──────────────────────────────────────────────────────

def test_decode_lower_upper_and_mixed_case():
    for text in ("48656c6c6f", "48656C6C6F", "48656C6c6F"):
        result = hex_codec.decode(text)
        assert result.ok
        assert result.value == b"Hello"


def test_decode_empty_is_ok():
    assert hex_codec.decode("").value == b""
    assert hex_codec.decode("   ").value == b""


def test_decode_trims_whitespace():
    assert hex_codec.decode("  48656c6c6f \n").value == b"Hello"


def test_decode_odd_length():
    result = hex_codec.decode("48656c6c6")
    assert not result.ok
    assert result.code == CodecErrorCode.INVALID_LENGTH


def test_decode_invalid_character_reports_position():
    result = hex_codec.decode("48656c6c6g")
    assert not result.ok
    assert result.code == CodecErrorCode.INVALID_CHARACTER
    assert result.position == 9


def test_decode_rejects_interior_space():
    result = hex_codec.decode("48 65")
    assert not result.ok


def test_length_checked_before_characters():
    assert hex_codec.decode("zzz").code == CodecErrorCode.INVALID_LENGTH


def test_decode_is_case_insensitive_after_encode():
    data = [0, 10, 127, 128, 200, 255]
    encoded = hex_codec.encode(data)
    assert hex_codec.decode(encoded).value == hex_codec.decode(encoded.upper()).value
    assert list(hex_codec.decode(encoded).value) == data


# ─── is_valid_hex ────────────────────────────────────────────────

def test_is_valid_hex():
    assert hex_codec.is_valid_hex("48656c6c6f")
    assert hex_codec.is_valid_hex("ABCDEF")
    assert hex_codec.is_valid_hex("00")
    assert not hex_codec.is_valid_hex("")
    assert not hex_codec.is_valid_hex("abc")
    assert not hex_codec.is_valid_hex("ghij")
    assert not hex_codec.is_valid_hex("12 34")


# ─── constant_time_equal ─────────────────────────────────────────

def test_constant_time_equal_matches_normalized_equality():
    pairs = [
        ("48656c6c6f", "48656c6c6f"),
        ("ABCDEF", "abcdef"),
        ("", ""),
        ("  abc  ", "abc"),
        ("48656c6c6f", "48656c6c70"),
        ("abc", "abcd"),
        ("abc", "def"),
    ]
    for a, b in pairs:
        expected = a.strip().lower() == b.strip().lower()
        assert hex_codec.constant_time_equal(a, b) is expected


def test_constant_time_equal_bytes():
    assert hex_codec.constant_time_equal_bytes([1, 2, 3], [1, 2, 3])
    assert hex_codec.constant_time_equal_bytes([], [])
    assert not hex_codec.constant_time_equal_bytes([1, 2, 3], [1, 2, 4])
    assert not hex_codec.constant_time_equal_bytes([1, 2], [1, 2, 3])


# ─── byte_length / pad_to_byte_length ────────────────────────────

def test_byte_length():
    assert hex_codec.byte_length("48656c6c6f").value == 5
    assert hex_codec.byte_length("").value == 0
    assert hex_codec.byte_length("abc").code == CodecErrorCode.INVALID_LENGTH


def test_pad_to_byte_length():
    assert hex_codec.pad_to_byte_length("ff", 4).value == "000000ff"
    assert hex_codec.pad_to_byte_length("aabbccdd", 4).value == "aabbccdd"


def test_pad_never_truncates():
    result = hex_codec.pad_to_byte_length("aabbccdd", 2)
    assert not result.ok
    assert result.code == CodecErrorCode.EXCEEDS_TARGET


def test_pad_propagates_decode_errors():
    assert hex_codec.pad_to_byte_length("fff", 4).code == CodecErrorCode.INVALID_LENGTH


# ─── xor_hex ─────────────────────────────────────────────────────

def test_xor_hex():
    assert hex_codec.xor_hex("ff00", "00ff").value == "ffff"
    assert hex_codec.xor_hex("abcd", "abcd").value == "0000"


def test_xor_hex_length_mismatch():
    assert hex_codec.xor_hex("aabb", "aabbcc").code == CodecErrorCode.LENGTH_MISMATCH


# ─── case transforms ─────────────────────────────────────────────

def test_case_transforms():
    assert hex_codec.to_lowercase("ABCDEF").value == "abcdef"
    assert hex_codec.to_uppercase("abcdef").value == "ABCDEF"


def test_case_transforms_reject_what_decode_rejects():
    assert not hex_codec.to_uppercase("xyz1").ok
    assert not hex_codec.to_lowercase("abc").ok


# ─── string composition ──────────────────────────────────────────

def test_encode_string():
    assert hex_codec.encode_string("Hello") == "48656c6c6f"
    assert hex_codec.encode_string("") == ""
    assert hex_codec.encode_string("A") == "41"


def test_encode_string_outside_single_byte_domain_is_empty():
    assert hex_codec.encode_string("Hello 世界") == ""


def test_decode_to_string():
    assert hex_codec.decode_to_string("48656c6c6f").value == "Hello"
    assert hex_codec.decode_to_string("").value == ""
    assert hex_codec.decode_to_string("4").code == CodecErrorCode.INVALID_LENGTH


def test_string_round_trip():
    original = "Hello World!"
    assert hex_codec.decode_to_string(hex_codec.encode_string(original)).value == original


# ─── hexdump ─────────────────────────────────────────────────────

def test_hexdump_single_line():
    line = hex_codec.hexdump(b"Hello")
    assert line.startswith("00000000  48 65 6c 6c 6f")
    assert line.endswith("|Hello|")


def test_hexdump_full_line_has_gap_after_eighth_byte():
    line = hex_codec.hexdump(bytes(range(65, 81)))
    assert line == (
        "00000000  41 42 43 44 45 46 47 48  49 4a 4b 4c 4d 4e 4f 50  "
        "|ABCDEFGHIJKLMNOP|"
    )


def test_hexdump_wraps_and_masks_non_printables():
    dump = hex_codec.hexdump([0x41] * 16 + [0x0A, 0xA0])
    lines = dump.split("\n")
    assert len(lines) == 2
    assert lines[1].startswith("00000010  0a a0")
    assert lines[1].endswith("|..|")


def test_hexdump_empty():
    assert hex_codec.hexdump(b"") == ""
