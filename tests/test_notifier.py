# tests/test_notifier.py

from __future__ import annotations

import logging

import pytest

from notifier import Notifier


def test_notify_calls_subscribers_in_registration_order() -> None:
    n = Notifier()
    seen: list[tuple[str, object]] = []
    n.subscribe(lambda v: seen.append(("a", v)))
    n.subscribe(lambda v: seen.append(("b", v)))

    n.notify("x")

    assert seen == [("a", "x"), ("b", "x")]


def test_same_callback_twice_is_called_twice() -> None:
    n = Notifier()
    seen: list[object] = []
    n.subscribe(seen.append)
    n.subscribe(seen.append)

    n.notify(1)

    assert seen == [1, 1]
    assert len(n) == 2


def test_notify_without_subscribers_is_noop() -> None:
    Notifier().notify("nothing")


def test_failing_subscriber_does_not_block_the_rest(caplog) -> None:
    n = Notifier("demo")
    seen: list[object] = []

    def boom(_v: object) -> None:
        raise RuntimeError("boom")

    n.subscribe(boom)
    n.subscribe(seen.append)

    with caplog.at_level(logging.ERROR, logger="notifier"):
        n.notify("v")

    assert seen == ["v"]
    assert any("demo" in r.getMessage() for r in caplog.records)


def test_dispose_removes_only_that_subscription() -> None:
    n = Notifier()
    seen: list[object] = []
    first = n.subscribe(seen.append)
    n.subscribe(seen.append)

    first.dispose()
    first.dispose()
    n.notify("v")

    assert seen == ["v"]
    assert len(n) == 1
    assert first.active is False


def test_dispose_during_notify_still_delivers_current_value() -> None:
    n = Notifier()
    seen: list[object] = []
    holder = {}

    def first(v: object) -> None:
        holder["second"].dispose()

    n.subscribe(first)
    holder["second"] = n.subscribe(seen.append)

    n.notify("once")
    n.notify("twice")

    assert seen == ["once"]


def test_os_error_from_subscriber_propagates() -> None:
    n = Notifier()
    seen: list[object] = []

    def disk_full(_v: object) -> None:
        raise OSError(28, "No space left on device")

    n.subscribe(disk_full)
    n.subscribe(seen.append)

    with pytest.raises(OSError):
        n.notify("v")

    assert seen == []
