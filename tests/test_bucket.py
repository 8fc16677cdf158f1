from unittest.mock import Mock

from emitkit.bucket import Bucket, Listener, same_callback


def make(fn=None, context=None, once=False):
    return Listener(fn or Mock(), context, once)


def test_single_record_is_stored_bare_and_promoted():
    first, second = make(), make()
    bucket = Bucket(first)
    assert bucket._slot is first
    bucket.add(second)
    assert bucket._slot == [first, second]
    assert bucket.records() == (first, second)
    assert len(bucket) == 2


def test_discard_uses_identity_and_demotes_to_single():
    fn = Mock()
    first, second = make(fn), make(fn)
    bucket = Bucket(first, second)

    assert bucket.discard(make(fn)) is False
    assert bucket.discard(first) is True
    assert bucket._slot is second
    assert bucket.discard(second) is True
    assert len(bucket) == 0
    assert not bucket
    assert bucket.discard(second) is False


def test_records_is_a_snapshot():
    bucket = Bucket(make())
    snapshot = bucket.records()
    bucket.add(make())
    assert len(snapshot) == 1
    assert len(bucket) == 2


def test_without_filters_and_keeps_order():
    keep, drop = Mock(), Mock()
    records = [make(keep), make(drop), make(keep)]
    remaining = Bucket(*records).without(drop)
    assert remaining.records() == (records[0], records[2])


def test_without_returns_none_when_nothing_survives():
    fn = Mock()
    assert Bucket(make(fn), make(fn)).without(fn) is None


def test_matches_context_and_once_restrictions():
    fn = Mock()
    ctx, other = object(), object()
    record = make(fn, ctx, once=False)

    assert record.matches(fn)
    assert record.matches(fn, ctx)
    assert not record.matches(fn, other)
    assert not record.matches(fn, once=True)
    assert not record.matches(Mock())
    assert make(fn, ctx, once=True).matches(fn, once=True)


def test_same_callback_treats_equal_bound_methods_as_identical():
    class Handler:
        def handle(self):
            pass

    a, b = Handler(), Handler()
    assert a.handle is not a.handle
    assert same_callback(a.handle, a.handle)
    assert not same_callback(a.handle, b.handle)
    assert not same_callback(a.handle, Handler.handle)


def test_invoke_binds_context_for_plain_functions():
    ctx = object()
    seen = []

    def fn(this, value):
        seen.append((this, value))

    make(fn, ctx).invoke((1,))
    assert seen == [(ctx, 1)]


def test_invoke_calls_other_callables_as_is():
    fn = Mock(return_value="ok")
    assert make(fn, object()).invoke((1, 2)) == "ok"
    fn.assert_called_once_with(1, 2)
