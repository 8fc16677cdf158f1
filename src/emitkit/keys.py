"""Event keys: plain strings or opaque symbolic tokens."""

from __future__ import annotations
from typing import Union


class Symbol:
    """An opaque event token compared by identity.

    Two symbols are never equal unless they are the same object, even when
    they share a description.
    """

    __slots__ = ("description",)

    def __init__(self, description: str | None = None) -> None:
        self.description = description

    def __repr__(self) -> str:
        if self.description is None:
            return "Symbol()"
        return f"Symbol({self.description!r})"


# Only strings and Symbols are supported keys. Other hashables are stored as
# plain dict keys, so 1, 1.0 and True would collapse into a single event.
EventKey = Union[str, Symbol]


def is_textual(event: EventKey) -> bool:
    """Return True for textual keys, False for symbolic ones."""
    return isinstance(event, str)
