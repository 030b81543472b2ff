import errno
import os

import pytest

from dynmenu.util import MenuCancelled, MenuError, die


def test_die_raises_with_message():
    with pytest.raises(MenuError) as info:
        die("cannot open display")
    assert str(info.value) == "cannot open display"


def test_die_without_current_exception_keeps_colon():
    with pytest.raises(MenuError) as info:
        die("strdup:")
    assert str(info.value) == "strdup:"


def test_die_appends_current_os_error():
    try:
        raise OSError(errno.ENOENT, os.strerror(errno.ENOENT))
    except OSError as exc:
        with pytest.raises(MenuError) as info:
            die("calloc:")
        assert info.value.__cause__ is exc
    assert str(info.value) == "calloc: " + os.strerror(errno.ENOENT)


def test_die_ignores_current_exception_without_colon():
    try:
        raise ValueError("inner")
    except ValueError:
        with pytest.raises(MenuError) as info:
            die("no fonts could be loaded.")
    assert str(info.value) == "no fonts could be loaded."


def test_exit_statuses_match_failure():
    assert MenuError("x").exit_status == 1
    assert MenuCancelled().exit_status == 1