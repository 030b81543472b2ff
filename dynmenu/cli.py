"""Command line entry point: read items, run the menu on the terminal, print the choice."""

from __future__ import annotations

import codecs
import os
import re
import sys
import termios
import tty
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import TextIO

from .config import Config, Scheme, default_config
from .matching import Item
from .menu import LRPAD, Key, Menu, Outcome
from .render import fit_text, text_width
from .util import MenuCancelled, MenuError, die

VERSION = "5.3"

_USAGE = (
    "usage: dynmenu [-bFfiv] [-l lines] [-p prompt] [-fn font] [-m monitor]\n"
    "             [-nb color] [-nf color] [-sb color] [-sf color] [-w windowid]"
)

_PASTE_START = "\x1b[200~"
_PASTE_END = "\x1b[201~"
_SEQUENCE = re.compile(r"\x1b[\[O]([0-9;]*)([A-Za-z~])")
_CSI_KEYS = {
    "A": Key.UP,
    "B": Key.DOWN,
    "C": Key.RIGHT,
    "D": Key.LEFT,
    "H": Key.HOME,
    "F": Key.END,
}
_TILDE_KEYS = {
    "1": Key.HOME,
    "7": Key.HOME,
    "4": Key.END,
    "8": Key.END,
    "3": Key.DELETE,
    "5": Key.PRIOR,
    "6": Key.NEXT,
}
_ALT_KEYS = {
    "g": Key.HOME,
    "G": Key.END,
    "h": Key.UP,
    "j": Key.NEXT,
    "k": Key.PRIOR,
    "l": Key.DOWN,
}

Row = list[tuple[Scheme, str]]


@dataclass
class Options:
    """Parsed command line options."""

    config: Config = field(default_factory=default_config)
    fast: bool = False
    case_sensitive: bool = False
    monitor: int = -1
    embed: str | None = None
    version: bool = False


def _atoi(text: str) -> int:
    found = re.match(r"\s*([+-]?\d+)", text)
    return int(found.group(1)) if found else 0


def parse_args(argv: Iterable[str]) -> Options:
    """Parse the command line; raise :class:`MenuError` with the usage on misuse."""
    args = list(argv)
    options = Options()
    config = options.config
    index = 0
    while index < len(args):
        arg = args[index]
        if arg == "-v":
            options.version = True
            return options
        if arg == "-b":
            config.topbar = False
        elif arg == "-F":
            config.fuzzy = False
        elif arg == "-f":
            options.fast = True
        elif arg == "-s":
            options.case_sensitive = True
        elif index + 1 == len(args):
            die(_USAGE)
        else:
            index += 1
            value = args[index]
            if arg == "-l":
                config.lines = _atoi(value)
            elif arg == "-m":
                options.monitor = _atoi(value)
            elif arg == "-p":
                config.prompt = value
            elif arg == "-fn":
                config.fonts[0] = value
            elif arg == "-nb":
                config.colors[Scheme.NORM] = (config.colors[Scheme.NORM][0], value)
            elif arg == "-nf":
                config.colors[Scheme.NORM] = (value, config.colors[Scheme.NORM][1])
            elif arg == "-sb":
                config.colors[Scheme.SEL] = (config.colors[Scheme.SEL][0], value)
            elif arg == "-sf":
                config.colors[Scheme.SEL] = (value, config.colors[Scheme.SEL][1])
            elif arg == "-w":
                options.embed = value
            else:
                die(_USAGE)
        index += 1
    return options


def read_items(stream: Iterable[str]) -> list[Item]:
    """Turn each line of *stream* into an item, dropping the trailing newline."""
    return [Item(line.removesuffix("\n")) for line in stream]


def _textw(text: str) -> int:
    return text_width(text) + LRPAD


def _cell(text: str, width: int) -> str:
    """Text drawn with left padding into exactly *width* cells."""
    if width <= 0:
        return ""
    pad = LRPAD // 2
    if width <= pad:
        return " " * width
    shown = " " * pad + fit_text(text, width - pad)
    return shown + " " * (width - text_width(shown))


def _scheme_for(menu: Menu, item: Item) -> Scheme:
    if item is menu.selected:
        return Scheme.SEL
    if item.out:
        return Scheme.OUT
    return Scheme.NORM


def _row_width(row: Row) -> int:
    return sum(text_width(text) for _, text in row)


def _pad_row(row: Row, width: int) -> Row:
    gap = width - _row_width(row)
    if gap > 0:
        row.append((Scheme.NORM, " " * gap))
    return row


def draw(menu: Menu, config: Config) -> list[Row]:
    """Lay the menu out as rows of ``(scheme, text)`` segments, each row the menu's width."""
    width = menu.width
    x = 0
    top: Row = []
    if config.prompt:
        top.append((Scheme.SEL, _cell(config.prompt, menu.prompt_width)))
        x += menu.prompt_width
    field_width = width - x if menu.lines > 0 or not menu.matches else menu.input_width
    top.append((Scheme.NORM, _cell(menu.text, field_width)))
    rows = [top]

    if menu.lines > 0:
        for item in menu.visible_items():
            row: Row = [(Scheme.NORM, " " * x)] if x else []
            row.append((_scheme_for(menu, item), _cell(item.text, width - x)))
            rows.append(_pad_row(row, width))
        while len(rows) < menu.lines + 1:
            rows.append([(Scheme.NORM, " " * width)])
    elif menu.matches:
        x += menu.input_width
        arrow = _textw("<")
        top.append((Scheme.NORM, _cell("<", arrow) if menu.current else " " * arrow))
        x += arrow
        right = _textw(">")
        for item in menu.visible_items():
            item_width = min(_textw(item.text), width - x - right)
            if item_width <= 0:
                break
            top.append((_scheme_for(menu, item), _cell(item.text, item_width)))
            x += item_width
        if menu.next_page is not None:
            gap = max(0, width - right - x)
            if gap:
                top.append((Scheme.NORM, " " * gap))
            top.append((Scheme.NORM, _cell(">", right)))
    _pad_row(top, width)
    return rows


def _cursor_column(menu: Menu) -> int:
    start = menu.prompt_width if menu.config.prompt else 0
    column = start + LRPAD // 2 + text_width(menu.text[:menu.cursor])
    return max(0, min(column, menu.width - 1))


def _parse_color(name: str) -> str:
    digits = name[1:] if name.startswith("#") else ""
    if re.fullmatch(r"[0-9a-fA-F]{3}", digits):
        digits = "".join(char * 2 for char in digits)
    if not re.fullmatch(r"[0-9a-fA-F]{6}", digits):
        die(f"error, cannot allocate color '{name}'")
    red, green, blue = (int(digits[pos:pos + 2], 16) for pos in (0, 2, 4))
    return f"{red};{green};{blue}"


def _palette(config: Config) -> dict[Scheme, tuple[str, str]]:
    return {
        scheme: (_parse_color(fg), _parse_color(bg))
        for scheme, (fg, bg) in config.colors.items()
    }


@dataclass(frozen=True)
class _Press:
    key: Key | str
    control: bool = False
    shift: bool = False
    alt: bool = False


@dataclass(frozen=True)
class _Paste:
    text: str


class _KeyDecoder:
    """Turns raw terminal input into key presses and pasted text."""

    def __init__(self) -> None:
        self._decoder = codecs.getincrementaldecoder("utf-8")("replace")
        self._pending = ""

    def feed(self, data: bytes) -> list[_Press | _Paste]:
        self._pending += self._decoder.decode(data)
        events: list[_Press | _Paste] = []
        while self._pending:
            event, used = self._next(self._pending)
            if not used:
                break
            if event is not None:
                events.append(event)
            self._pending = self._pending[used:]
        return events

    @staticmethod
    def _next(data: str) -> tuple[_Press | _Paste | None, int]:
        if data.startswith(_PASTE_START):
            end = data.find(_PASTE_END)
            if end == -1:
                return None, 0
            return _Paste(data[len(_PASTE_START):end]), end + len(_PASTE_END)
        char = data[0]
        if char == "\x1b":
            if len(data) == 1 or data[1] == "\x1b":
                return _Press(Key.ESCAPE), 1
            if data[1] in "[O":
                found = _SEQUENCE.match(data)
                if not found:
                    return _Press(Key.ESCAPE), 1
                params, final = found.groups()
                parts = params.split(";") if params else []
                modifier = int(parts[1]) if len(parts) > 1 and parts[1].isdigit() else 1
                bits = max(modifier - 1, 0)
                if final == "~":
                    key = _TILDE_KEYS.get(parts[0] if parts else "")
                else:
                    key = _CSI_KEYS.get(final)
                if key is None:
                    return None, found.end()
                return _Press(key, control=bool(bits & 4), shift=bool(bits & 1),
                              alt=bool(bits & 2)), found.end()
            return _Press(data[1], alt=True), 2
        if char in "\r\n":
            return _Press(Key.RETURN), 1
        if char == "\x7f":
            return _Press(Key.BACKSPACE), 1
        if char == "\t":
            return _Press(Key.TAB), 1
        if ord(char) < 0x20:
            return _Press(chr(ord(char) + 0x60), control=True), 1
        run = re.match(r"[^\x00-\x1f\x7f]+", data)
        assert run is not None
        return _Press(run.group()), run.end()


def _dispatch(menu: Menu, event: _Press | _Paste) -> Outcome:
    if isinstance(event, _Paste):
        menu.insert(re.split(r"[\r\n]", event.text, maxsplit=1)[0])
        return Outcome()
    if event.alt and not event.control:
        if event.key == "b":
            menu.move_word(-1)
        elif event.key == "f":
            menu.move_word(+1)
        elif event.key in _ALT_KEYS:
            return menu.press(_ALT_KEYS[event.key], shift=event.shift)
        return Outcome()
    return menu.press(event.key, control=event.control, shift=event.shift)


def _interact(menu: Menu, config: Config, read: Callable[[], bytes],
              show: Callable[[list[Row], int], None], output: TextIO) -> int:
    """Run the key loop; return the exit status."""
    decoder = _KeyDecoder()
    show(draw(menu, config), _cursor_column(menu))
    while True:
        data = read()
        if not data:
            return 1
        for event in decoder.feed(data):
            try:
                outcome = _dispatch(menu, event)
            except MenuCancelled:
                return 1
            if outcome.output is not None:
                print(outcome.output, file=output)
                output.flush()
            if outcome.finished:
                return 0
        show(draw(menu, config), _cursor_column(menu))


class _Terminal:
    """The controlling terminal in raw mode, on the alternate screen."""

    def __init__(self, config: Config) -> None:
        self._config = config
        self._palette = _palette(config)
        self._fd = -1
        self._saved: list | None = None
        self.columns = 80
        self.rows = 24

    def __enter__(self) -> _Terminal:
        try:
            self._fd = os.open("/dev/tty", os.O_RDWR | os.O_NOCTTY)
        except OSError:
            die("cannot open terminal:")
        try:
            self._saved = termios.tcgetattr(self._fd)
            tty.setraw(self._fd)
            self.columns, self.rows = os.get_terminal_size(self._fd)
        except (OSError, termios.error):
            os.close(self._fd)
            die("cannot set up terminal:")
        self._write("\x1b[?1049h\x1b[2J\x1b[?2004h")
        return self

    def __exit__(self, *exc_info: object) -> None:
        self._write("\x1b[?2004l\x1b[0m\x1b[?25h\x1b[?1049l")
        if self._saved is not None:
            termios.tcsetattr(self._fd, termios.TCSADRAIN, self._saved)
        os.close(self._fd)

    def _write(self, text: str) -> None:
        data = text.encode("utf-8", "replace")
        while data:
            written = os.write(self._fd, data)
            data = data[written:]

    def read(self) -> bytes:
        return os.read(self._fd, 1024)

    def show(self, rows: list[Row], cursor: int) -> None:
        top = 1 if self._config.topbar else max(1, self.rows - len(rows) + 1)
        parts = ["\x1b[?25l"]
        for offset, row in enumerate(rows):
            parts.append(f"\x1b[{top + offset};1H")
            for scheme, text in row:
                fg, bg = self._palette[scheme]
                parts.append(f"\x1b[38;2;{fg}m\x1b[48;2;{bg}m{text}")
            parts.append("\x1b[0m")
        parts.append(f"\x1b[{top};{cursor + 1}H\x1b[?25h")
        self._write("".join(parts))


def _run(options: Options, items: list[Item], terminal: _Terminal) -> int:
    menu = Menu(items, options.config, terminal.columns, options.case_sensitive)
    return _interact(menu, options.config, terminal.read, terminal.show, sys.stdout)


def main(argv: list[str] | None = None) -> int:
    """Read items from standard input, let the user pick one, print it."""
    if argv is None:
        argv = sys.argv[1:]
    try:
        options = parse_args(argv)
        if options.version:
            print(f"dynmenu-{VERSION}")
            return 0
        _palette(options.config)
        if options.fast and not sys.stdin.isatty():
            with _Terminal(options.config) as terminal:
                return _run(options, read_items(sys.stdin), terminal)
        items = read_items(sys.stdin)
        with _Terminal(options.config) as terminal:
            return _run(options, items, terminal)
    except MenuError as exc:
        print(exc, file=sys.stderr)
        return exc.exit_status