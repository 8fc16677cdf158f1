"""Synchronous in-process event emitter."""

from __future__ import annotations

from typing import Any, Callable, ClassVar, Dict, List, Tuple

from .bucket import Bucket, Listener
from .errors import InvalidListenerError
from .keys import EventKey, is_textual
from .logging import get_emitkit_logger

logger = get_emitkit_logger("emitter")

_MISSING = object()


class EventEmitter:
    """
    Registry of listeners keyed by event, dispatched synchronously.

    Listeners run on the caller's thread in registration order. Exceptions
    raised by a listener propagate out of `dispatch` and stop the remaining
    listeners for that call. The emitter does no locking of its own.
    """

    # Keys are stored as-is, never namespaced with a prefix.
    prefixed: ClassVar[bool] = False

    def __init__(self) -> None:
        self._events: Dict[EventKey, Bucket] = {}
        self._events_count: int = 0

    def register(
        self,
        event: EventKey,
        fn: Callable[..., Any],
        context: Any = None,
        once: bool = False,
    ) -> EventEmitter:
        """
        Add a listener for a given event.

        Args:
            event: The event key, a string or a `Symbol`.
            fn: The listener. Plain functions are bound to `context`.
            context: Receiver for the listener, defaults to the emitter.
            once: Drop the listener the first time it is dispatched.

        Returns:
            The emitter, for chaining.
        """
        if not callable(fn):
            raise InvalidListenerError()

        record = Listener(fn, self if context is None else context, once)
        bucket = self._events.get(event)
        if bucket is None:
            self._events[event] = Bucket(record)
            self._events_count += 1
        else:
            bucket.add(record)
        logger.debug(f"Registered {'once ' if once else ''}listener {fn!r} for event {event!r}")
        return self

    def register_once(
        self, event: EventKey, fn: Callable[..., Any], context: Any = None
    ) -> EventEmitter:
        """Add a one-time listener for a given event."""
        return self.register(event, fn, context, True)

    def _clear_event(self, event: EventKey) -> None:
        self._events_count -= 1
        if self._events_count == 0:
            self._events = {}
        else:
            del self._events[event]

    def event_names(self) -> List[EventKey]:
        """List the events that currently have listeners, strings first."""
        if self._events_count == 0:
            return []
        names = [event for event in self._events if is_textual(event)]
        names.extend(event for event in self._events if not is_textual(event))
        return names

    def listeners(self, event: EventKey) -> List[Callable[..., Any]]:
        """Return the callbacks registered for an event, in dispatch order."""
        bucket = self._events.get(event)
        if bucket is None:
            return []
        return bucket.callbacks()

    def raw_listeners(self, event: EventKey) -> Tuple[Listener, ...]:
        """Return the listener records for an event, in dispatch order."""
        bucket = self._events.get(event)
        if bucket is None:
            return ()
        return bucket.records()

    def listener_count(self, event: EventKey) -> int:
        """Return the number of listeners registered for an event."""
        bucket = self._events.get(event)
        if bucket is None:
            return 0
        return len(bucket)

    def dispatch(self, event: EventKey, *args: Any) -> bool:
        """
        Call each listener registered for an event with `args`.

        The set of listeners is captured when dispatch starts; listeners added
        or removed by a running listener take effect on the next dispatch.
        Once listeners are removed right before they are called.

        Returns:
            True if the event had listeners, False otherwise.
        """
        bucket = self._events.get(event)
        if bucket is None:
            return False

        records = bucket.records()
        logger.debug(f"Dispatching event {event!r} to {len(records)} listener(s)")
        for record in records:
            if record.once:
                # A re-entrant dispatch may already have run it.
                if record.consumed:
                    continue
                record.consumed = True
                self._discard(event, record)
            record.invoke(args)
        return True

    def _discard(self, event: EventKey, record: Listener) -> None:
        # Look the bucket up again: a listener may have replaced or cleared it.
        bucket = self._events.get(event)
        if bucket is not None and bucket.discard(record) and not bucket:
            self._clear_event(event)

    def unregister(
        self,
        event: EventKey,
        fn: Callable[..., Any] | None = None,
        context: Any = None,
        once: bool = False,
    ) -> EventEmitter:
        """
        Remove the listeners of a given event.

        Args:
            event: The event key.
            fn: Only remove this callback. Removes every listener when omitted.
            context: Only remove listeners bound to this exact context.
            once: Only remove one-time listeners.

        Returns:
            The emitter, for chaining.
        """
        bucket = self._events.get(event)
        if bucket is None:
            return self
        if fn is None:
            self._clear_event(event)
            logger.debug(f"Removed all listeners for event {event!r}")
            return self

        remaining = bucket.without(fn, context, once)
        if remaining is None:
            self._clear_event(event)
        else:
            self._events[event] = remaining
        logger.debug(f"Removed listener {fn!r} from event {event!r}")
        return self

    def unregister_all(self, event: Any = _MISSING) -> EventEmitter:
        """Remove all listeners, or those of the specified event."""
        if event is _MISSING:
            self._events = {}
            self._events_count = 0
            logger.debug("Removed all listeners for all events")
        elif event in self._events:
            self._clear_event(event)
            logger.debug(f"Removed all listeners for event {event!r}")
        return self

    # Aliases
    def on(
        self, event: EventKey, fn: Callable[..., Any], context: Any = None
    ) -> EventEmitter:
        """Alias for `register`."""
        return self.register(event, fn, context)

    def add_listener(
        self,
        event: EventKey,
        fn: Callable[..., Any],
        context: Any = None,
        once: bool = False,
    ) -> EventEmitter:
        """Alias for `register`."""
        return self.register(event, fn, context, once)

    def once(
        self, event: EventKey, fn: Callable[..., Any], context: Any = None
    ) -> EventEmitter:
        """Alias for `register_once`."""
        return self.register_once(event, fn, context)

    def emit(self, event: EventKey, *args: Any) -> bool:
        """Alias for `dispatch`."""
        return self.dispatch(event, *args)

    def remove_listener(
        self,
        event: EventKey,
        fn: Callable[..., Any] | None = None,
        context: Any = None,
        once: bool = False,
    ) -> EventEmitter:
        """Alias for `unregister`."""
        return self.unregister(event, fn, context, once)

    def off(
        self,
        event: EventKey,
        fn: Callable[..., Any] | None = None,
        context: Any = None,
        once: bool = False,
    ) -> EventEmitter:
        """Alias for `unregister`."""
        return self.unregister(event, fn, context, once)

    def remove_all_listeners(self, event: Any = _MISSING) -> EventEmitter:
        """Alias for `unregister_all`."""
        return self.unregister_all(event)

    def __contains__(self, event: object) -> bool:
        return event in self._events

    def __repr__(self) -> str:
        return f"<EventEmitter events={self._events_count}>"
