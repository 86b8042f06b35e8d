"""Tests for the Observable value holder."""

from __future__ import annotations

from forgepr.prs.observable import Observable


class TestObservable:
    def test_subscribe_receives_current_value(self):
        flag = Observable(False)
        seen: list[bool] = []

        flag.subscribe(seen.append)

        assert seen == [False]

    def test_only_changes_are_published(self):
        flag = Observable(False)
        seen: list[bool] = []
        flag.subscribe(seen.append)

        flag.set(True)
        flag.set(True)
        flag.set(False)

        assert seen == [False, True, False]
        assert flag.value is False

    def test_unsubscribe_stops_notifications(self):
        flag = Observable(0)
        seen: list[int] = []
        unsubscribe = flag.subscribe(seen.append)

        unsubscribe()
        flag.set(1)
        unsubscribe()

        assert seen == [0]
        assert flag.subscriber_count == 0

    def test_failing_subscriber_does_not_block_others(self):
        flag = Observable("a")
        seen: list[str] = []

        def broken(_value: str) -> None:
            raise RuntimeError("subscriber bug")

        flag.subscribe(broken)
        flag.subscribe(seen.append)
        flag.set("b")

        assert seen == ["a", "b"]
        assert flag.value == "b"
