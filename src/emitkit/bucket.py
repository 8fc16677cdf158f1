"""Listener records and the per-event bucket that stores them."""

from __future__ import annotations

import types
from dataclasses import dataclass, field
from typing import Any, Callable, Iterator, Optional, Tuple, Union


def same_callback(a: Callable[..., Any], b: Callable[..., Any]) -> bool:
    """
    Return True when `a` and `b` are the same callback.

    Bound methods are recreated on every attribute access, so two bound
    methods match when they wrap the identical function and receiver.
    """
    if a is b:
        return True
    if isinstance(a, types.MethodType) and isinstance(b, types.MethodType):
        return a.__func__ is b.__func__ and a.__self__ is b.__self__
    return False


@dataclass(eq=False)
class Listener:
    """
    A single registered callback.

    Attributes:
        fn: The callable to invoke.
        context: The receiver bound when `fn` is a plain function.
        once: Whether the record is dropped the first time it is dispatched.
        consumed: Set once a one-time record has been picked by a dispatch.
    """

    fn: Callable[..., Any]
    context: Any
    once: bool = False
    consumed: bool = field(default=False, repr=False)

    def matches(
        self,
        fn: Callable[..., Any],
        context: Any = None,
        once: bool = False,
    ) -> bool:
        """Check the record against a removal request."""
        if not same_callback(self.fn, fn):
            return False
        if once and not self.once:
            return False
        if context is not None and self.context is not context:
            return False
        return True

    def invoke(self, args: Tuple[Any, ...]) -> Any:
        """Call the listener with its context bound as receiver."""
        fn = self.fn
        if isinstance(fn, types.FunctionType) and self.context is not None:
            return fn.__get__(self.context)(*args)
        return fn(*args)


class Bucket:
    """
    Ordered listener records for one event.

    A single record is stored bare and only promoted to a list once a second
    record arrives. Callers only ever see ordered sequences.
    """

    __slots__ = ("_slot",)

    def __init__(self, *records: Listener) -> None:
        self._slot: Union[None, Listener, list[Listener]] = None
        for record in records:
            self.add(record)

    def add(self, record: Listener) -> None:
        """Append a record, keeping registration order."""
        if self._slot is None:
            self._slot = record
        elif isinstance(self._slot, Listener):
            self._slot = [self._slot, record]
        else:
            self._slot.append(record)

    def discard(self, record: Listener) -> bool:
        """Remove `record` by identity. Returns True if it was present."""
        slot = self._slot
        if slot is None:
            return False
        if isinstance(slot, Listener):
            if slot is record:
                self._slot = None
                return True
            return False
        for index, candidate in enumerate(slot):
            if candidate is record:
                del slot[index]
                if len(slot) == 1:
                    self._slot = slot[0]
                return True
        return False

    def without(
        self,
        fn: Callable[..., Any],
        context: Any = None,
        once: bool = False,
    ) -> Optional[Bucket]:
        """
        Build the bucket of records not matching a removal request.

        Returns None when nothing would survive, so the caller can drop the key.
        """
        survivors = [r for r in self.records() if not r.matches(fn, context, once)]
        if not survivors:
            return None
        return Bucket(*survivors)

    def records(self) -> Tuple[Listener, ...]:
        """Snapshot of the records in dispatch order."""
        slot = self._slot
        if slot is None:
            return ()
        if isinstance(slot, Listener):
            return (slot,)
        return tuple(slot)

    def callbacks(self) -> list[Callable[..., Any]]:
        return [record.fn for record in self.records()]

    def __len__(self) -> int:
        slot = self._slot
        if slot is None:
            return 0
        if isinstance(slot, Listener):
            return 1
        return len(slot)

    def __iter__(self) -> Iterator[Listener]:
        return iter(self.records())

    def __repr__(self) -> str:
        return f"<Bucket listeners={len(self)}>"
