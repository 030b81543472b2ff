import pytest

from dynmenu.render import ELLIPSIS, clamp_width, fit_text, text_width


def test_ascii_width_is_length():
    assert text_width("hello") == len("hello")


def test_empty_width_is_zero():
    assert text_width("") == 0


def test_wide_characters_take_two_cells():
    assert text_width("日本") == 4


def test_control_characters_take_no_cells():
    assert text_width("a\tb") == text_width("ab")


@pytest.mark.parametrize("text", ["", "a", "hello world", "日本語"])
def test_clamp_width_never_exceeds_limit(text):
    for limit in range(0, 12):
        result = clamp_width(text, limit)
        assert result <= limit
        assert result == min(limit, text_width(text))


def test_clamp_zero_limit():
    assert clamp_width("anything", 0) == 0


def test_fit_text_keeps_fitting_text():
    assert fit_text("menu", 10) == "menu"
    assert fit_text("menu", len("menu")) == "menu"


def test_fit_text_adds_ellipsis_on_overflow():
    result = fit_text("a rather long entry", 10)
    assert result.endswith(ELLIPSIS)
    assert text_width(result) <= 10
    assert "a rather long entry".startswith(result[: -len(ELLIPSIS)])


def test_fit_text_too_narrow_for_ellipsis_is_empty():
    assert fit_text("overflowing", 2) == ""
    assert fit_text("overflowing", 0) == ""


@pytest.mark.parametrize("width", range(3, 20))
def test_fit_text_always_fits(width):
    text = "日本語 mixed text here"
    assert text_width(fit_text(text, width)) <= width