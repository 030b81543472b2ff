"""Error types and the fatal-error helper shared by the menu."""

from __future__ import annotations

import sys
from typing import NoReturn


class MenuError(Exception):
    """A fatal error: the menu cannot go on and exits with status 1."""

    exit_status = 1


class MenuCancelled(Exception):
    """The user dismissed the menu without choosing anything."""

    exit_status = 1


def die(message: str) -> NoReturn:
    """Raise :class:`MenuError` carrying *message*.

    A message that ends in ``':'`` is completed with a description of the
    exception currently being handled, if there is one.
    """
    current = sys.exc_info()[1]
    if message.endswith(":") and current is not None:
        detail = getattr(current, "strerror", None) or str(current)
        message = f"{message} {detail}"
    raise MenuError(message) from current