import pytest

from dynmenu.utf8 import UTF_INVALID, decode, iter_codepoints


@pytest.mark.parametrize("char", ["A", "é", "€", "😀", "\x7f", "\U0010ffff"])
def test_decode_valid(char):
    encoded = char.encode()
    assert decode(encoded) == (ord(char), len(encoded))


def test_decode_only_reads_first_character():
    assert decode("ab".encode()) == (ord("a"), 1)


def test_decode_empty():
    assert decode(b"") == (UTF_INVALID, 0)


@pytest.mark.parametrize("data", [b"\x80", b"\xf8", b"\xff"])
def test_decode_bad_lead_byte(data):
    assert decode(data) == (UTF_INVALID, 1)


def test_decode_overlong_is_invalid():
    data = b"\xc0\x80"
    assert decode(data) == (UTF_INVALID, len(data))


def test_decode_surrogate_is_invalid():
    data = b"\xed\xa0\x80"
    assert decode(data) == (UTF_INVALID, len(data))


def test_decode_broken_continuation_stops_before_it():
    assert decode(b"\xe2A") == (UTF_INVALID, 1)


def test_decode_truncated_consumes_nothing():
    assert decode("€".encode()[:2]) == (UTF_INVALID, 0)


@pytest.mark.parametrize("text", ["", "hello", "naïve café", "€ and 😀 mixed"])
def test_iter_codepoints_round_trip(text):
    assert list(iter_codepoints(text.encode())) == [ord(c) for c in text]
    assert list(iter_codepoints(text)) == [ord(c) for c in text]


def test_iter_codepoints_replaces_garbage():
    result = list(iter_codepoints(b"a\xffb"))
    assert result == [ord("a"), UTF_INVALID, ord("b")]


def test_iter_codepoints_truncated_tail():
    result = list(iter_codepoints(b"x" + "€".encode()[:2]))
    assert result == [ord("x"), UTF_INVALID]