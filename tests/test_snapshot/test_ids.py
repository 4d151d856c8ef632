"""Tests for EventIdGenerator — format and same-millisecond uniqueness."""

from __future__ import annotations

from zabbix_watch.snapshot.ids import EventIdGenerator


class TestEventIdGenerator:
    def test_format(self) -> None:
        ids = EventIdGenerator(clock=lambda: 1700000000.123)
        assert ids.next() == "E:1700000000123:1"

    def test_same_millisecond_ids_are_distinct(self) -> None:
        ids = EventIdGenerator(clock=lambda: 1700000000.0)
        generated = [ids.next() for _ in range(1000)]
        assert len(set(generated)) == 1000

    def test_counter_increases(self) -> None:
        ids = EventIdGenerator(clock=lambda: 1.0)
        counters = [int(ids.next().rsplit(":", 1)[1]) for _ in range(5)]
        assert counters == [1, 2, 3, 4, 5]

    def test_generators_are_independent(self) -> None:
        a = EventIdGenerator(clock=lambda: 1.0)
        b = EventIdGenerator(clock=lambda: 1.0)
        a.next()
        assert b.next() == "E:1000:1"

    def test_default_clock_embeds_wall_time(self) -> None:
        millis = int(EventIdGenerator().next().split(":")[1])
        assert millis > 1_600_000_000_000
