"""Blankness checks shared by the matchers."""

from collections.abc import Sized
from typing import Any


def is_blank(value: Any) -> bool:
    """Return True for None, False, whitespace-only strings and empty containers.

    Zero and other falsy numbers are not blank.
    """
    if value is None or value is False:
        return True
    if isinstance(value, (str, bytes)):
        return not value.strip()
    if isinstance(value, Sized):
        return len(value) == 0
    return False
