# dynmenu

`dynmenu` is a dynamic menu for the terminal. It reads a list of lines from
standard input, lets you narrow the list by typing, and prints the item you
choose to standard output. This makes it a building block for launchers,
pickers and other small scripts.

The package also ships `dynmenu-stest`, a filter that keeps only the paths
passing a set of file tests, which is handy for building the list of
programs to feed into the menu.

## Installation

```
pip install .
```

Python 3.10 or later and a POSIX system are required. The menu draws on
the controlling terminal (`/dev/tty`), so it works while standard input and
standard output are redirected.

## The menu

```
ls | dynmenu
printf 'alpha\nbeta\ngamma\n' | dynmenu -p 'Pick:' -l 5
```

The menu takes over the terminal's alternate screen and draws a bar at the
top (or at the bottom with `-b`). Without `-l` the matching items are shown
side by side after the input field, with `<` and `>` marking further pages;
with `-l` they are shown as a vertical list. The default prompt is
`Search...`.

Typed text is matched against every item. By default matching is fuzzy:
the characters you type must appear in the item in order, and the results
are ranked so that matches starting early and spanning few extra characters
come first. With fuzzy matching turned off (`-F`), the input is split into
space-separated tokens that must all appear in an item; exact matches come
first, then items starting with the first token, then the rest. Matching
ignores case unless `-s` is given.

The exit status is 0 when an item was chosen and 1 when the menu was
dismissed or on an error.

### Options

| Option        | Meaning                                                       |
|---------------|---------------------------------------------------------------|
| `-v`          | print the version (`dynmenu-5.3`) and exit                    |
| `-b`          | place the menu at the bottom of the terminal                  |
| `-F`          | turn off fuzzy matching                                       |
| `-f`          | open the terminal before reading standard input               |
| `-s`          | match case-sensitively                                        |
| `-l lines`    | show the items as a vertical list of the given length         |
| `-p prompt`   | text shown to the left of the input field                     |
| `-nb color`   | normal background colour                                      |
| `-nf color`   | normal foreground colour                                      |
| `-sb color`   | selected background colour                                    |
| `-sf color`   | selected foreground colour                                    |
| `-fn font`    | accepted and stored; not used for drawing                     |
| `-m monitor`  | accepted and stored; not used for drawing                     |
| `-w windowid` | accepted and stored; not used for drawing                     |

Colours are given as `#rgb` or `#rrggbb`; anything else is an error.

### Keys

- `Return` prints the selected item (or the typed text when nothing
  matches) and exits with status 0.
- `Escape`, `Ctrl+C`, `Ctrl+G` or `Ctrl+[` exit with status 1 without
  printing.
- `Tab` (`Ctrl+I`) copies the selected item into the input field.
- `Up`/`Down`, `Left`/`Right`, `Home`/`End`, `Page Up`/`Page Down` move
  the selection and the cursor.
- `Ctrl+A`/`Ctrl+E` go to start/end, `Ctrl+B`/`Ctrl+F` act as
  `Left`/`Right`, `Ctrl+P`/`Ctrl+N` as `Up`/`Down`.
- `Backspace`/`Ctrl+H` and `Delete`/`Ctrl+D` delete a character,
  `Ctrl+K` deletes to the end, `Ctrl+U` deletes to the start, `Ctrl+W`
  deletes the previous word.
- `Ctrl+Left`/`Ctrl+Right` and `Alt+B`/`Alt+F` move by words.
- `Alt+H`/`Alt+J`/`Alt+K`/`Alt+L` and `Alt+G`/`Alt+Shift+G` navigate the
  list vi-style (up, page down, page up, down, first, last).
- Text pasted into the terminal is inserted up to its first line break.

### Using it from Python

```python
from dynmenu.config import default_config
from dynmenu.matching import Item, match
from dynmenu.menu import Key, Menu

items = [Item("firefox"), Item("foot"), Item("thunar")]
print([item.text for item in match(items, "ft", fuzzy=True, case_sensitive=False)])

menu = Menu(items, default_config(), 80, False)
menu.insert("th")
print([item.text for item in menu.visible_items()])

outcome = menu.press(Key.RETURN)
print(outcome.output, outcome.finished)
```

`Menu.press` takes a `Key` or typed text, with `control` and `shift`
flags, and returns an `Outcome`. `Return` with `shift=True` outputs the
typed text instead of the selection; with `control=True` it outputs the
selection, marks it, and keeps the menu open. `Ctrl+Y` returns an
`Outcome` whose `paste` names the selection to insert. Dismissing the menu
raises `dynmenu.util.MenuCancelled`.

`dynmenu.cli.draw` lays a menu out as rows of `(Scheme, text)` segments,
and `dynmenu.render` measures and fits text into terminal cells
(`text_width`, `clamp_width`, `fit_text`).

## The file filter

```
dynmenu-stest -flx /usr/bin /usr/local/bin | sort -u | dynmenu
```

Paths are taken from the arguments, or one per line from standard input
when there are none. Each path that passes every requested test is
printed.

| Flag      | Test                                              |
|-----------|---------------------------------------------------|
| `-a`      | include hidden files                              |
| `-b`      | block special file                                |
| `-c`      | character special file                            |
| `-d`      | directory                                         |
| `-e`      | exists                                            |
| `-f`      | regular file                                      |
| `-g`      | set-group-id bit set                              |
| `-h`      | symbolic link                                     |
| `-l`      | test the contents of the given directories        |
| `-n file` | newer than `file`                                 |
| `-o file` | older than `file`                                 |
| `-p`      | named pipe                                        |
| `-q`      | print nothing; exit on the first match            |
| `-r`      | readable                                          |
| `-s`      | not empty                                         |
| `-u`      | set-user-id bit set                               |
| `-v`      | invert the sense of the tests                     |
| `-w`      | writable                                          |
| `-x`      | executable                                        |

The exit status is 0 if any path matched, 1 if none did, and 2 on a usage
error. From Python, `dynmenu.stest.parse_args`, `test_path` and
`filter_paths` do the same work.

## What it does not do

The menu runs in a terminal only. It opens no graphical window, so it
cannot embed into another window, choose a monitor or load fonts: `-w`,
`-m` and `-fn` are accepted but have no effect, and `-f` does not grab the
keyboard. From the terminal command, `Ctrl+Y` does not paste a selection or
clipboard, and `Shift+Return` and `Ctrl+Return` cannot be told apart from
`Return`; these are available only through `Menu.press`.

## Running the tests

```
pip install .[test]
pytest
```