import pytest

from splicetext.encodings import (
    Encoding,
    byte_to_column,
    column_to_byte,
    decode_utf8,
    negotiate_encoding,
    unit_count,
)
from splicetext.errors import (
    ColumnOutOfBoundsError,
    InvalidBoundaryError,
    InvalidUtf8Error,
    OutOfBoundsError,
)

EMOJI_LINE = "a😀b".encode("utf-8")
MIXED_LINE = "héllo 😀 wörld €".encode("utf-8")


def test_utf16_column_after_surrogate_pair() -> None:
    assert column_to_byte(EMOJI_LINE, 3, Encoding.UTF16) == 5
    assert column_to_byte(EMOJI_LINE, 4, Encoding.UTF16) == 6


def test_utf16_column_inside_surrogate_pair() -> None:
    with pytest.raises(InvalidBoundaryError):
        column_to_byte(EMOJI_LINE, 2, Encoding.UTF16)


def test_utf32_column_counts_scalars() -> None:
    assert column_to_byte(EMOJI_LINE, 2, Encoding.UTF32) == 5
    assert column_to_byte(EMOJI_LINE, 3, Encoding.UTF32) == 6


def test_utf8_column_is_raw_bytes() -> None:
    assert column_to_byte(EMOJI_LINE, 1, Encoding.UTF8) == 1
    assert column_to_byte(EMOJI_LINE, 5, Encoding.UTF8) == 5
    with pytest.raises(InvalidBoundaryError):
        column_to_byte(EMOJI_LINE, 2, Encoding.UTF8)


@pytest.mark.parametrize(
    ("encoding", "column"),
    [(Encoding.UTF8, 7), (Encoding.UTF16, 5), (Encoding.UTF32, 4)],
)
def test_column_past_end_of_line(encoding: Encoding, column: int) -> None:
    with pytest.raises(ColumnOutOfBoundsError) as info:
        column_to_byte(EMOJI_LINE, column, encoding)

    assert info.value.column == column


def test_negative_column_rejected() -> None:
    with pytest.raises(ColumnOutOfBoundsError):
        column_to_byte(b"abc", -1, Encoding.UTF16)


def test_ascii_fast_path() -> None:
    assert column_to_byte(b"hello", 5, "utf-16") == 5
    assert byte_to_column(b"hello", 2, "utf-32") == 2
    with pytest.raises(ColumnOutOfBoundsError):
        column_to_byte(b"hello", 6, Encoding.UTF32)


def test_two_byte_scalar_in_utf16() -> None:
    assert column_to_byte("é!".encode("utf-8"), 1, Encoding.UTF16) == 2


def test_byte_to_column_inverse() -> None:
    assert byte_to_column(EMOJI_LINE, 5, Encoding.UTF16) == 3
    assert byte_to_column(EMOJI_LINE, 5, Encoding.UTF32) == 2
    assert byte_to_column(EMOJI_LINE, 5, Encoding.UTF8) == 5
    assert byte_to_column(EMOJI_LINE, 0, Encoding.UTF16) == 0


def test_byte_to_column_rejects_split_scalar() -> None:
    with pytest.raises(InvalidBoundaryError) as info:
        byte_to_column(EMOJI_LINE, 3, Encoding.UTF16)

    assert info.value.offset == 3


def test_byte_to_column_past_end() -> None:
    with pytest.raises(OutOfBoundsError):
        byte_to_column(EMOJI_LINE, 7, Encoding.UTF16)


def test_malformed_utf8_is_reported() -> None:
    with pytest.raises(InvalidUtf8Error) as info:
        column_to_byte(b"a\xffb", 1, Encoding.UTF16)
    assert info.value.offset == 1

    with pytest.raises(InvalidUtf8Error):
        byte_to_column(b"\xe2\x82", 0, Encoding.UTF8)


@pytest.mark.parametrize("encoding", list(Encoding))
def test_round_trip_for_every_valid_column(encoding: Encoding) -> None:
    total = unit_count(MIXED_LINE, encoding)
    checked = 0
    for column in range(total + 1):
        try:
            offset = column_to_byte(MIXED_LINE, column, encoding)
        except InvalidBoundaryError:
            continue
        assert byte_to_column(MIXED_LINE, offset, encoding) == column
        checked += 1

    assert checked == len(MIXED_LINE.decode("utf-8")) + 1


def test_unit_count_per_encoding() -> None:
    assert unit_count(EMOJI_LINE, Encoding.UTF8) == 6
    assert unit_count(EMOJI_LINE, Encoding.UTF16) == 4
    assert unit_count(EMOJI_LINE, Encoding.UTF32) == 3


def test_encoding_parse_aliases() -> None:
    assert Encoding.parse("UTF8") is Encoding.UTF8
    assert Encoding.parse("utf_16") is Encoding.UTF16
    assert Encoding.parse(Encoding.UTF32) is Encoding.UTF32
    with pytest.raises(ValueError):
        Encoding.parse("latin-1")


def test_negotiate_encoding_prefers_client_order() -> None:
    assert negotiate_encoding(None) is Encoding.UTF16
    assert negotiate_encoding([]) is Encoding.UTF16
    assert negotiate_encoding(["utf-16", "utf-8"]) is Encoding.UTF8
    assert negotiate_encoding(["utf-32", "utf-8"]) is Encoding.UTF32
    assert negotiate_encoding(["bogus", "utf-16"]) is Encoding.UTF16


@pytest.mark.parametrize(
    ("char", "expected"),
    [
        ("a", {Encoding.UTF8: 1, Encoding.UTF16: 1, Encoding.UTF32: 1}),
        ("€", {Encoding.UTF8: 3, Encoding.UTF16: 1, Encoding.UTF32: 1}),
        ("😀", {Encoding.UTF8: 4, Encoding.UTF16: 2, Encoding.UTF32: 1}),
    ],
)
def test_units_per_scalar(char: str, expected: dict) -> None:
    for encoding, units in expected.items():
        assert encoding.units(ord(char)) == units
        assert unit_count(char.encode("utf-8"), encoding) == units


def test_decode_utf8_names_its_subject() -> None:
    assert decode_utf8(bytearray("é".encode("utf-8"))) == "é"
    with pytest.raises(InvalidUtf8Error, match="Replacement text") as info:
        decode_utf8(b"ab\xff", "Replacement text")
    assert info.value.offset == 2
