"""Selecting and ordering menu items that match the typed text."""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass


@dataclass(eq=False)
class Item:
    """A menu entry; ``out`` marks entries already printed."""

    text: str
    out: bool = False
    distance: float = 0.0


def cistrstr(haystack: str, needle: str) -> int | None:
    """Return the index of the first case-insensitive *needle* in *haystack*.

    An empty needle matches at 0; no match gives ``None``.
    """
    folded_needle = [char.lower() for char in needle]
    folded_hay = [char.lower() for char in haystack]
    size = len(folded_needle)
    for start in range(len(folded_hay) - size + 1):
        if folded_hay[start:start + size] == folded_needle:
            return start
    return None


def _same_char(a: str, b: str, case_sensitive: bool) -> bool:
    return a == b if case_sensitive else a.lower() == b.lower()


def _contains(haystack: str, needle: str, case_sensitive: bool) -> bool:
    if case_sensitive:
        return needle in haystack
    return cistrstr(haystack, needle) is not None


def _equal(a: str, b: str, case_sensitive: bool) -> bool:
    return a == b if case_sensitive else a.lower() == b.lower()


def _starts_with(text: str, prefix: str, case_sensitive: bool) -> bool:
    if case_sensitive:
        return text.startswith(prefix)
    return text.lower().startswith(prefix.lower())


def fuzzy_match(items: Iterable[Item], text: str, case_sensitive: bool = False) -> list[Item]:
    """Return items containing the characters of *text* in order, best first.

    Each match gets a distance that grows with a late start and with
    unmatched characters inside the matched span; results are sorted by it.
    An empty *text* returns every item in its original order.
    """
    if not text:
        return list(items)
    found: list[Item] = []
    for item in items:
        pidx = 0
        start = end = -1
        for index, char in enumerate(item.text):
            if _same_char(text[pidx], char, case_sensitive):
                if start == -1:
                    start = index
                pidx += 1
                if pidx == len(text):
                    end = index
                    break
        if end != -1:
            item.distance = math.log(start + 2) + (end - start - len(text))
            found.append(item)
    found.sort(key=lambda item: item.distance)
    return found


def token_match(items: Iterable[Item], text: str, case_sensitive: bool = False) -> list[Item]:
    """Return items containing every space-separated token of *text*.

    Exact matches come first, then items starting with the first token,
    then the rest, each group in original order.
    """
    tokens = [token for token in text.split(" ") if token]
    exact: list[Item] = []
    prefix: list[Item] = []
    substring: list[Item] = []
    for item in items:
        if not all(_contains(item.text, token, case_sensitive) for token in tokens):
            continue
        if not tokens or _equal(text, item.text, case_sensitive):
            exact.append(item)
        elif _starts_with(item.text, tokens[0], case_sensitive):
            prefix.append(item)
        else:
            substring.append(item)
    return exact + prefix + substring


def match(items: Iterable[Item], text: str, fuzzy: bool = True,
          case_sensitive: bool = False) -> list[Item]:
    """Match *items* against *text* with the fuzzy or the token strategy."""
    if fuzzy:
        return fuzzy_match(items, text, case_sensitive)
    return token_match(items, text, case_sensitive)