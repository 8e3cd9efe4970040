"""Tests for the replaying CachedValue publisher."""

from __future__ import annotations

import asyncio

import pytest

from app_settings.observable import CachedValue, ValueNotSetError


def test_unset_value_raises_on_read():
    cached = CachedValue("language")

    assert not cached.has_value
    assert cached.get("fallback") == "fallback"
    with pytest.raises(ValueNotSetError):
        cached.value


def test_seeded_value_is_readable():
    cached = CachedValue("count", seed=0)

    assert cached.has_value
    assert cached.value == 0


def test_subscribe_replays_current_value_synchronously():
    cached = CachedValue("count", seed=1)
    received = []

    cached.subscribe(received.append)

    assert received == [1]


def test_subscribe_to_unset_value_receives_nothing_until_publish():
    cached = CachedValue("language")
    received = []

    cached.subscribe(received.append)
    assert received == []

    cached.publish("en")
    assert received == ["en"]


def test_publishes_are_delivered_in_order_to_every_subscriber():
    cached = CachedValue("count")
    first, second = [], []
    cached.subscribe(first.append)
    cached.publish(1)
    cached.subscribe(second.append)
    cached.publish(2)
    cached.publish(3)

    assert first == [1, 2, 3]
    assert second == [1, 2, 3]
    assert cached.value == 3


def test_publish_from_callback_keeps_order_for_other_subscribers():
    cached = CachedValue("count")
    later = []

    def republish(value):
        if value == 1:
            cached.publish(2)

    cached.subscribe(republish)
    cached.subscribe(later.append)
    cached.publish(1)

    assert later == [1, 2]
    assert cached.value == 2


def test_cancelled_subscription_stops_receiving():
    cached = CachedValue("count", seed=0)
    received = []
    subscription = cached.subscribe(received.append)

    subscription.cancel()
    subscription.cancel()
    cached.publish(1)

    assert received == [0]
    assert not subscription.active


def test_failing_subscriber_does_not_block_others(caplog):
    cached = CachedValue("count")
    received = []

    def explode(value):
        raise RuntimeError("subscriber bug")

    cached.subscribe(explode)
    cached.subscribe(received.append)
    cached.publish(1)

    assert received == [1]
    assert "subscriber bug" in caplog.text


def test_close_is_terminal_and_idempotent():
    cached = CachedValue("count", seed=1)
    received, closed = [], []
    cached.subscribe(received.append, lambda: closed.append(True))

    cached.close()
    cached.close()

    assert cached.is_closed
    assert cached.publish(2) is False
    assert cached.value == 1
    assert received == [1]
    assert closed == [True]


def test_subscribe_after_close_replays_and_closes_immediately():
    cached = CachedValue("count", seed=5)
    cached.close()
    received, closed = [], []

    subscription = cached.subscribe(received.append, lambda: closed.append(True))

    assert received == [5]
    assert closed == [True]
    assert not subscription.active


def test_close_from_callback_drops_pending_values():
    cached = CachedValue("count")
    received = []

    def close_on_first(value):
        received.append(value)
        cached.publish(value + 1)
        cached.close()

    cached.subscribe(close_on_first)
    cached.publish(1)

    assert received == [1]
    assert cached.value == 1


@pytest.mark.asyncio
async def test_stream_replays_then_follows_until_closed():
    cached = CachedValue("count", seed=1)
    received = []

    async def consume():
        async for value in cached:
            received.append(value)

    task = asyncio.create_task(consume())
    await asyncio.sleep(0)
    cached.publish(2)
    cached.publish(3)
    cached.close()
    await asyncio.wait_for(task, timeout=1)

    assert received == [1, 2, 3]


@pytest.mark.asyncio
async def test_stream_exit_cancels_subscription():
    cached = CachedValue("count", seed=1)

    stream = cached.stream()
    assert await stream.__anext__() == 1
    await stream.aclose()

    assert cached._subscribers == []


def test_value_read_inside_callback_lags_nested_publish():
    cached = CachedValue("count")
    seen = []

    def republish(value):
        if value == 1:
            cached.publish(2)
            seen.append(cached.value)

    cached.subscribe(republish)
    cached.publish(1)

    assert seen == [1]
    assert cached.value == 2
