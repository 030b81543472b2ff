"""Filter a list of files by their properties."""

from __future__ import annotations

import os
import stat
import sys
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

_FLAG_CHARS = "abcdefghlpqrsuvwx"
_PATH_MAX = 4096
_USAGE = "usage: stest [-abcdefghlpqrsuvwx] [-n file] [-o file] [file...]"


@dataclass(frozen=True)
class StestOptions:
    """Selected tests; ``newer_than``/``older_than`` are mtimes in seconds."""

    flags: frozenset[str] = frozenset()
    newer_than: int | None = None
    older_than: int | None = None


def _mtime_of(path: str) -> int | None:
    try:
        return int(os.stat(path).st_mtime)
    except OSError as exc:
        print(f"{path}: {exc.strerror}", file=sys.stderr)
        return None


def parse_args(argv: Iterable[str]) -> tuple[StestOptions, list[str]]:
    """Parse options; return them with the remaining operands.

    Raises ValueError carrying the usage text on a bad option.
    """
    args = list(argv)
    flags: set[str] = set()
    newer = older = None
    index = 0
    while index < len(args):
        arg = args[index]
        if len(arg) < 2 or not arg.startswith("-"):
            break
        if arg == "--":
            index += 1
            break
        for pos, char in enumerate(arg[1:], start=1):
            if char in "no":
                if pos + 1 < len(arg):
                    value = arg[pos + 1:]
                elif index + 1 < len(args):
                    index += 1
                    value = args[index]
                else:
                    raise ValueError(_USAGE)
                if char == "n":
                    newer = _mtime_of(value)
                else:
                    older = _mtime_of(value)
                break
            if char not in _FLAG_CHARS:
                raise ValueError(_USAGE)
            flags.add(char)
        index += 1
    return StestOptions(frozenset(flags), newer, older), args[index:]


def _passes(path: str, name: str, options: StestOptions) -> bool:
    try:
        st = os.stat(path)
    except OSError:
        return False
    flags = options.flags
    mode = st.st_mode
    if "a" not in flags and name.startswith("."):
        return False
    checks = (
        ("b", lambda: stat.S_ISBLK(mode)),
        ("c", lambda: stat.S_ISCHR(mode)),
        ("d", lambda: stat.S_ISDIR(mode)),
        ("e", lambda: os.access(path, os.F_OK)),
        ("f", lambda: stat.S_ISREG(mode)),
        ("g", lambda: bool(mode & stat.S_ISGID)),
        ("h", lambda: os.path.islink(path)),
        ("p", lambda: stat.S_ISFIFO(mode)),
        ("r", lambda: os.access(path, os.R_OK)),
        ("s", lambda: st.st_size > 0),
        ("u", lambda: bool(mode & stat.S_ISUID)),
        ("w", lambda: os.access(path, os.W_OK)),
        ("x", lambda: os.access(path, os.X_OK)),
    )
    if not all(check() for flag, check in checks if flag in flags):
        return False
    mtime = int(st.st_mtime)
    if options.newer_than is not None and not mtime > options.newer_than:
        return False
    if options.older_than is not None and not mtime < options.older_than:
        return False
    return True


def test_path(path: str, name: str, options: StestOptions) -> bool:
    """Tell whether *path*, shown as *name*, is selected by *options*."""
    return _passes(path, name, options) != ("v" in options.flags)


test_path.__test__ = False  # not a pytest test


def _candidates(paths: Iterable[str], options: StestOptions) -> Iterator[tuple[str, str]]:
    for operand in paths:
        if "l" in options.flags and os.path.isdir(operand):
            try:
                entries = [".", "..", *os.listdir(operand)]
            except OSError:
                yield operand, operand
                continue
            for entry in entries:
                path = f"{operand}/{entry}"
                if len(os.fsencode(path)) < _PATH_MAX:
                    yield path, entry
        else:
            yield operand, operand


def filter_paths(paths: Iterable[str], options: StestOptions) -> Iterator[str]:
    """Yield the names of the operands (or directory entries, with -l) that pass."""
    for path, name in _candidates(paths, options):
        if test_path(path, name, options):
            yield name


def _stdin_matches(options: StestOptions) -> Iterator[str]:
    for line in sys.stdin:
        line = line.removesuffix("\n")
        if test_path(line, line, options):
            yield line


def main(argv: list[str] | None = None) -> int:
    """Run the filter; return 0 if anything matched, 1 if not, 2 on misuse."""
    if argv is None:
        argv = sys.argv[1:]
    try:
        options, operands = parse_args(argv)
    except ValueError as exc:
        print(exc, file=sys.stderr)
        return 2
    names = filter_paths(operands, options) if operands else _stdin_matches(options)
    matched = False
    for name in names:
        if "q" in options.flags:
            return 0
        matched = True
        print(name)
    return 0 if matched else 1