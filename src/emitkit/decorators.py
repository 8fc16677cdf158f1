"""Declare listeners with decorators and bind them onto an emitter."""

from abc import ABC, abstractmethod
from typing import Any, Callable

from .emitter import EventEmitter
from .errors import EmitKitError
from .logging import get_emitkit_logger

logger = get_emitkit_logger("decorators")

MARKER = "__emitkit_decorators__"


class DecoratorError(EmitKitError):
    """Custom exception for decorator-related errors."""
    pass
class DecoratorApplyError(DecoratorError):
    """Exception raised when applying a decorator fails."""
    pass


class Decorator(ABC):
    """Abstract base class for decorators."""

    def __init__(self, **kwargs) -> None:
        """Initialize the decorator with given keyword arguments."""
        self.params = kwargs

    def __call__(self, func):
        """Attach the decorator to a function. Stacked decorators accumulate."""
        stacked = list(getattr(func, MARKER, ()))
        stacked.append(self)
        setattr(func, MARKER, stacked)
        return func

    @abstractmethod
    def apply(self, emitter: EventEmitter, func: Callable[..., Any]) -> None:
        """
        Apply the decorator logic.

        Args:
            emitter (EventEmitter): The emitter the function is bound onto.
            func (callable): The function or bound method being decorated.
        """
        pass

    @abstractmethod
    def revert(self, emitter: EventEmitter, func: Callable[..., Any]) -> None:
        """Undo `apply`."""
        pass


class OnEvent(Decorator):
    """Decorator to register an event listener. The event defaults to the function name."""

    def __init__(
        self, event: Any = None, *, once: bool = False, context: Any = None
    ) -> None:
        super().__init__(once=once, context=context)
        self.event = event
        self.once = once
        self.context = context

    def event_for(self, func: Callable[..., Any]) -> Any:
        return self.event if self.event is not None else func.__name__

    def apply(self, emitter: EventEmitter, func: Callable[..., Any]) -> None:
        event = self.event_for(func)
        emitter.register(event, func, self.context, self.once)
        logger.info(f"Registered event listener '{func.__name__}' for event {event!r}")

    def revert(self, emitter: EventEmitter, func: Callable[..., Any]) -> None:
        event = self.event_for(func)
        emitter.unregister(event, func, self.context, self.once)
        logger.info(f"Removed event listener '{func.__name__}' for event {event!r}")


def _decorated(instance: Any):
    """Yield (name, callable, decorators) for every decorated attribute of `instance`."""
    for attr_name in dir(instance):
        if attr_name.startswith("__"):
            continue
        attr = getattr(instance, attr_name)
        if not callable(attr):
            continue
        decorators = getattr(attr, MARKER, None)
        if decorators:
            yield attr_name, attr, decorators


def bind_listeners(emitter: EventEmitter, instance: Any) -> int:
    """
    Register every decorated method of `instance` on `emitter`.

    Returns:
        The number of listeners registered.
    """
    count = 0
    for attr_name, attr, decorators in _decorated(instance):
        for decorator in decorators:
            try:
                decorator.apply(emitter, attr)
            except Exception as e:
                raise DecoratorApplyError(
                    f"Failed to apply decorator {type(decorator).__name__} "
                    f"to {attr_name}: {str(e)}"
                ) from e
            count += 1
    return count


def unbind_listeners(emitter: EventEmitter, instance: Any) -> None:
    """Remove the listeners `bind_listeners` registered for `instance`."""
    for attr_name, attr, decorators in _decorated(instance):
        for decorator in decorators:
            try:
                decorator.revert(emitter, attr)
            except Exception as e:
                raise DecoratorApplyError(
                    f"Failed to revert decorator {type(decorator).__name__} "
                    f"on {attr_name}: {str(e)}"
                ) from e
