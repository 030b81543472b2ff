"""Interactive menu state: typed text, matches, paging and key handling."""

from __future__ import annotations

import enum
from collections.abc import Iterable
from dataclasses import dataclass

from .config import Config, default_config
from .matching import Item, match
from .render import clamp_width, text_width
from .util import MenuCancelled

LRPAD = 2
"""Cells of padding around each drawn piece of text, left and right together."""

ROW_HEIGHT = 1
"""Height of one row of the vertical list."""

MAX_TEXT_BYTES = 8191
"""Largest input text, in UTF-8 bytes."""


class Key(enum.Enum):
    """Named keys the menu reacts to."""

    HOME = enum.auto()
    END = enum.auto()
    LEFT = enum.auto()
    RIGHT = enum.auto()
    UP = enum.auto()
    DOWN = enum.auto()
    PRIOR = enum.auto()
    NEXT = enum.auto()
    DELETE = enum.auto()
    BACKSPACE = enum.auto()
    TAB = enum.auto()
    RETURN = enum.auto()
    ESCAPE = enum.auto()


@dataclass(frozen=True)
class Outcome:
    """What a key press asks of the caller.

    ``output`` is a line to print, ``finished`` ends the menu, and ``paste``
    names the selection (``"primary"`` or ``"clipboard"``) to insert.
    """

    output: str | None = None
    finished: bool = False
    paste: str | None = None


_CONTROL_KEYS = {
    "a": Key.HOME,
    "b": Key.LEFT,
    "c": Key.ESCAPE,
    "d": Key.DELETE,
    "e": Key.END,
    "f": Key.RIGHT,
    "g": Key.ESCAPE,
    "h": Key.BACKSPACE,
    "i": Key.TAB,
    "n": Key.DOWN,
    "p": Key.UP,
}


def _is_control(char: str) -> bool:
    return ord(char) < 0x20 or ord(char) == 0x7F


def _textw(text: str) -> int:
    return text_width(text) + LRPAD


class Menu:
    """The state of one menu over a fixed list of items.

    ``current`` is the index of the first match on the shown page,
    ``next_page`` the first match of the following page (``None`` at the
    end), ``prev_page`` the first match of the preceding page and
    ``selection`` the selected match; all are ``None`` with no matches.
    """

    def __init__(self, items: Iterable[Item], config: Config | None = None,
                 width: int = 80, case_sensitive: bool = False) -> None:
        self.items = list(items)
        self.config = config if config is not None else default_config()
        self.width = width
        self.case_sensitive = case_sensitive
        self.lines = max(0, min(self.config.lines, len(self.items)))
        prompt = self.config.prompt
        self.prompt_width = _textw(prompt) - LRPAD // 4 if prompt else 0
        self.input_width = width // 3
        self.text = ""
        self.cursor = 0
        self.matches: list[Item] = []
        self.current: int | None = None
        self.selection: int | None = None
        self.prev_page: int | None = None
        self.next_page: int | None = None
        self.refresh()

    @property
    def selected(self) -> Item | None:
        """The selected item, if any."""
        return None if self.selection is None else self.matches[self.selection]

    # matching and paging

    def refresh(self) -> None:
        """Match the items against the text and select the first match."""
        self.matches = match(self.items, self.text, self.config.fuzzy, self.case_sensitive)
        self.current = self.selection = 0 if self.matches else None
        self._calc_offsets()

    def _page_budget(self) -> int:
        if self.lines > 0:
            return self.lines * ROW_HEIGHT
        return self.width - (self.prompt_width + self.input_width + _textw("<") + _textw(">"))

    def _span(self, item: Item, budget: int) -> int:
        if self.lines > 0:
            return ROW_HEIGHT
        return min(clamp_width(item.text, budget) + LRPAD, budget)

    def _calc_offsets(self) -> None:
        if self.current is None:
            self.prev_page = self.next_page = None
            return
        budget = self._page_budget()
        used = 0
        self.next_page = None
        for index in range(self.current, len(self.matches)):
            used += self._span(self.matches[index], budget)
            if used > budget:
                self.next_page = index
                break
        used = 0
        prev = self.current
        while prev > 0:
            used += self._span(self.matches[prev - 1], budget)
            if used > budget:
                break
            prev -= 1
        self.prev_page = prev

    def visible_items(self) -> list[Item]:
        """Return the matches shown on the current page."""
        if self.current is None:
            return []
        end = self.next_page if self.next_page is not None else len(self.matches)
        return self.matches[self.current:end]

    # editing

    def insert(self, text: str) -> None:
        """Insert *text* at the cursor; text that would overflow is dropped."""
        size = len(self.text.encode("utf-8", "surrogatepass"))
        if size + len(text.encode("utf-8", "surrogatepass")) > MAX_TEXT_BYTES:
            return
        self.text = self.text[:self.cursor] + text + self.text[self.cursor:]
        self.cursor += len(text)
        self.refresh()

    def _remove_before_cursor(self, count: int) -> None:
        start = self.cursor - count
        self.text = self.text[:start] + self.text[self.cursor:]
        self.cursor = start

    def backspace(self) -> None:
        """Remove the character before the cursor."""
        if self.cursor == 0:
            return
        self._remove_before_cursor(1)
        self.refresh()

    def delete(self) -> None:
        """Remove the character under the cursor."""
        if self.cursor >= len(self.text):
            return
        self.cursor += 1
        self.backspace()

    def kill_right(self) -> None:
        """Remove everything from the cursor to the end."""
        self.text = self.text[:self.cursor]
        self.refresh()

    def kill_left(self) -> None:
        """Remove everything before the cursor."""
        self.text = self.text[self.cursor:]
        self.cursor = 0
        self.refresh()

    def kill_word(self) -> None:
        """Remove the word before the cursor and the delimiters after it."""
        delimiters = self.config.word_delimiters
        while self.cursor > 0 and self.text[self.cursor - 1] in delimiters:
            self._remove_before_cursor(1)
        while self.cursor > 0 and self.text[self.cursor - 1] not in delimiters:
            self._remove_before_cursor(1)
        self.refresh()

    def move_word(self, direction: int) -> None:
        """Move the cursor to the start (negative) or end (positive) of a word."""
        delimiters = self.config.word_delimiters
        text = self.text
        if direction < 0:
            while self.cursor > 0 and text[self.cursor - 1] in delimiters:
                self.cursor -= 1
            while self.cursor > 0 and text[self.cursor - 1] not in delimiters:
                self.cursor -= 1
        else:
            while self.cursor < len(text) and text[self.cursor] in delimiters:
                self.cursor += 1
            while self.cursor < len(text) and text[self.cursor] not in delimiters:
                self.cursor += 1

    def complete(self) -> None:
        """Replace the text with the selected item's text."""
        item = self.selected
        if item is None:
            return
        data = item.text.encode("utf-8", "surrogatepass")[:MAX_TEXT_BYTES]
        self.text = data.decode("utf-8", "ignore")
        self.cursor = len(self.text)
        self.refresh()

    # navigation

    def _end(self) -> None:
        if self.cursor < len(self.text):
            self.cursor = len(self.text)
            return
        if self.next_page is not None:
            self.current = len(self.matches) - 1
            self._calc_offsets()
            self.current = self.prev_page
            self._calc_offsets()
            while self.next_page is not None and self.current + 1 < len(self.matches):
                self.current += 1
                self._calc_offsets()
        self.selection = len(self.matches) - 1 if self.matches else None

    def _home(self) -> None:
        first = 0 if self.matches else None
        if self.selection == first:
            self.cursor = 0
            return
        self.selection = self.current = 0
        self._calc_offsets()

    def _up(self) -> None:
        if self.selection is not None and self.selection > 0:
            self.selection -= 1
            if self.selection + 1 == self.current:
                self.current = self.prev_page
                self._calc_offsets()

    def _down(self) -> None:
        if self.selection is not None and self.selection + 1 < len(self.matches):
            self.selection += 1
            if self.selection == self.next_page:
                self.current = self.next_page
                self._calc_offsets()

    def _left(self) -> None:
        if self.cursor > 0 and (not self.selection or self.lines > 0):
            self.cursor -= 1
            return
        if self.lines > 0:
            return
        self._up()

    def _right(self) -> None:
        if self.cursor < len(self.text):
            self.cursor += 1
            return
        if self.lines > 0:
            return
        self._down()

    def _page(self, target: int | None) -> None:
        if target is None:
            return
        self.selection = self.current = target
        self._calc_offsets()

    def _accept(self, control: bool, shift: bool) -> Outcome:
        item = self.selected
        output = item.text if item is not None and not shift else self.text
        if not control:
            return Outcome(output=output, finished=True)
        if item is not None:
            item.out = True
        return Outcome(output=output)

    def press(self, key: Key | str, control: bool = False, shift: bool = False) -> Outcome:
        """Handle one key press: a :class:`Key` or the typed text.

        Raises :class:`MenuCancelled` when the menu is dismissed.
        """
        if control:
            if isinstance(key, str):
                if key in _CONTROL_KEYS:
                    key = _CONTROL_KEYS[key]
                elif key in ("j", "J", "m", "M"):
                    key = Key.RETURN
                    control = False
                elif key == "k":
                    self.kill_right()
                    return Outcome()
                elif key == "u":
                    self.kill_left()
                    return Outcome()
                elif key == "w":
                    self.kill_word()
                    return Outcome()
                elif key in ("y", "Y"):
                    return Outcome(paste="clipboard" if shift else "primary")
                elif key == "[":
                    raise MenuCancelled("cancelled")
                else:
                    return Outcome()
            elif key is Key.LEFT:
                self.move_word(-1)
                return Outcome()
            elif key is Key.RIGHT:
                self.move_word(+1)
                return Outcome()
            elif key is not Key.RETURN:
                return Outcome()

        if isinstance(key, str):
            if key and not _is_control(key[0]):
                self.insert(key)
            return Outcome()

        if key is Key.ESCAPE:
            raise MenuCancelled("cancelled")
        if key is Key.RETURN:
            return self._accept(control, shift)
        actions = {
            Key.DELETE: self.delete,
            Key.BACKSPACE: self.backspace,
            Key.END: self._end,
            Key.HOME: self._home,
            Key.LEFT: self._left,
            Key.UP: self._up,
            Key.RIGHT: self._right,
            Key.DOWN: self._down,
            Key.NEXT: lambda: self._page(self.next_page),
            Key.PRIOR: lambda: self._page(self.prev_page),
            Key.TAB: self.complete,
        }
        actions[key]()
        return Outcome()