from unittest.mock import Mock

import pytest

from emitkit import OnEvent, bind_listeners, unbind_listeners
from emitkit.decorators import Decorator, DecoratorApplyError, MARKER


class Service:
    def __init__(self):
        self.events = []

    @OnEvent("ready")
    def on_ready(self, value):
        self.events.append(("ready", value))

    @OnEvent()
    def shutdown(self):
        self.events.append(("shutdown",))

    @OnEvent("ready", once=True)
    @OnEvent("boot")
    def first(self, value=None):
        self.events.append(("first", value))

    def undecorated(self):
        self.events.append(("undecorated",))


def test_decorator_marks_function_without_wrapping():
    def fn():
        pass

    assert OnEvent("x")(fn) is fn
    assert [d.event for d in getattr(fn, MARKER)] == ["x"]


def test_bind_listeners_registers_decorated_methods(emitter):
    service = Service()
    assert bind_listeners(emitter, service) == 4
    assert sorted(emitter.event_names()) == ["boot", "ready", "shutdown"]
    assert emitter.listener_count("ready") == 2


def test_bound_listeners_receive_dispatch_arguments(emitter):
    service = Service()
    bind_listeners(emitter, service)

    emitter.emit("ready", 1)
    emitter.emit("ready", 2)
    emitter.emit("shutdown")

    assert ("ready", 1) in service.events
    assert ("ready", 2) in service.events
    assert service.events.count(("first", 1)) == 1
    assert ("first", 2) not in service.events
    assert ("shutdown",) in service.events
    assert ("undecorated",) not in service.events


def test_unbind_listeners_removes_only_that_instance(emitter):
    a, b = Service(), Service()
    bind_listeners(emitter, a)
    bind_listeners(emitter, b)

    unbind_listeners(emitter, a)
    emitter.emit("shutdown")

    assert a.events == []
    assert b.events == [("shutdown",)]


def test_unbind_listeners_drops_empty_events(emitter):
    service = Service()
    bind_listeners(emitter, service)
    unbind_listeners(emitter, service)
    assert emitter.event_names() == []


def test_decorator_context_is_used_for_removal(emitter):
    ctx = object()

    class Module:
        @OnEvent("tick", context=ctx)
        def tick(self):
            pass

    module = Module()
    bind_listeners(emitter, module)
    assert emitter.raw_listeners("tick")[0].context is ctx
    unbind_listeners(emitter, module)
    assert emitter.listener_count("tick") == 0


def test_apply_failure_is_wrapped(emitter):
    class Broken(Decorator):
        def apply(self, emitter, func):
            raise RuntimeError("nope")

        def revert(self, emitter, func):
            pass

    class Holder:
        @Broken()
        def method(self):
            pass

    with pytest.raises(DecoratorApplyError, match="Broken to method: nope") as info:
        bind_listeners(emitter, Holder())
    assert isinstance(info.value.__cause__, RuntimeError)


def test_registration_is_logged(emitter, caplog):
    caplog.set_level("INFO", logger="emitkit.decorators")
    bind_listeners(emitter, Service())
    assert "Registered event listener 'on_ready' for event 'ready'" in caplog.text
