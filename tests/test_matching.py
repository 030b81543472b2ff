import math

import pytest

from dynmenu.matching import Item, cistrstr, fuzzy_match, match, token_match


def texts(items):
    return [item.text for item in items]


def make(*names):
    return [Item(name) for name in names]


def test_cistrstr_finds_case_insensitively():
    index = cistrstr("Hello", "LL")
    assert "Hello"[index:index + 2].lower() == "ll"


def test_cistrstr_empty_needle_matches_start():
    assert cistrstr("abc", "") == 0
    assert cistrstr("", "") == 0


def test_cistrstr_no_match():
    assert cistrstr("abc", "abcd") is None
    assert cistrstr("abc", "x") is None


def test_fuzzy_empty_text_keeps_everything_in_order():
    items = make("b", "a", "c")
    assert fuzzy_match(items, "") == items


def test_fuzzy_matches_in_order_characters():
    items = make("xaxbxc", "abc", "cba", "zzz")
    result = fuzzy_match(items, "abc")
    assert texts(result) == ["abc", "xaxbxc"]


def test_fuzzy_distances_sorted_and_exact_scores_log_two():
    items = make("qqqfoo", "f_o_o", "foo")
    result = fuzzy_match(items, "foo")
    distances = [item.distance for item in result]
    assert distances == sorted(distances)
    assert result[0].text == "foo"
    assert result[0].distance == pytest.approx(math.log(2))


def test_fuzzy_case_sensitivity():
    items = make("FooBar")
    assert texts(fuzzy_match(items, "fb")) == ["FooBar"]
    assert fuzzy_match(items, "fb", case_sensitive=True) == []


def test_token_order_exact_prefix_substring():
    items = make("barfoo", "foobar", "foo", "baz")
    assert texts(token_match(items, "foo")) == ["foo", "foobar", "barfoo"]


def test_token_all_tokens_must_match():
    items = make("red apple", "green apple", "red cherry")
    assert texts(token_match(items, "apple red")) == ["red apple"]


def test_token_blank_text_matches_all():
    items = make("one", "two")
    assert token_match(items, "   ") == items


def test_token_case_sensitivity():
    items = make("Foo")
    assert texts(token_match(items, "FOO")) == ["Foo"]
    assert token_match(items, "FOO", case_sensitive=True) == []


def test_match_dispatches():
    items = make("a_b", "ab")
    assert match(items, "ab", fuzzy=False) == token_match(items, "ab")
    assert match(items, "ab", fuzzy=True) == fuzzy_match(items, "ab")


def test_items_compare_by_identity():
    first, second = make("same", "same")
    assert first != second
    assert token_match([first, second], "same") == [first, second]