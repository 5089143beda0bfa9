from __future__ import annotations

import json

import redis

from credregistry.services.notifications import (
    InMemoryNotificationSink,
    NotificationLog,
    RedisNotificationSink,
)


def test_in_memory_sink_logs_and_filters_by_recipient(clock) -> None:
    sink = InMemoryNotificationSink(clock=clock)
    sink.send("s1", "first")
    sink.send("s2", "other")
    sink.send("s1", "second")

    got = sink.for_recipient("s1")
    assert [n.message for n in got] == ["first", "second"]
    assert all(n.sent_at == clock.now for n in got)
    assert got[0].id != got[1].id


def test_in_memory_sink_satisfies_log_protocol() -> None:
    assert isinstance(InMemoryNotificationSink(), NotificationLog)


class _FakePipeline:
    def __init__(self, store: dict[str, list[str]], fail: bool) -> None:
        self._store = store
        self._fail = fail
        self._ops: list[tuple] = []

    def lpush(self, key: str, value: str) -> None:
        self._ops.append(("lpush", key, value))

    def ltrim(self, key: str, start: int, end: int) -> None:
        self._ops.append(("ltrim", key, start, end))

    def execute(self) -> None:
        if self._fail:
            raise redis.ConnectionError("connection refused")
        for op in self._ops:
            if op[0] == "lpush":
                self._store.setdefault(op[1], []).insert(0, op[2])
            else:
                _, key, start, end = op
                self._store[key] = self._store[key][start : end + 1]


class _FakeRedis:
    def __init__(self, fail: bool = False) -> None:
        self.store: dict[str, list[str]] = {}
        self.fail = fail

    def pipeline(self) -> _FakePipeline:
        return _FakePipeline(self.store, self.fail)

    def lrange(self, key: str, start: int, end: int) -> list[str]:
        if self.fail:
            raise redis.ConnectionError("connection refused")
        return list(self.store.get(key, []))


def test_redis_sink_pushes_json_per_recipient(clock) -> None:
    fake = _FakeRedis()
    sink = RedisNotificationSink(fake, clock=clock)

    sink.send("s1", "Your credential has been revoked: fraud")

    [raw] = fake.store["notifications:s1"]
    record = json.loads(raw)
    assert record["recipient_id"] == "s1"
    assert record["message"] == "Your credential has been revoked: fraud"
    assert record["sent_at"] == clock.now


def test_redis_sink_reads_back_oldest_first(clock) -> None:
    sink = RedisNotificationSink(_FakeRedis(), clock=clock)
    sink.send("s1", "one")
    sink.send("s1", "two")
    assert [n.message for n in sink.for_recipient("s1")] == ["one", "two"]


def test_redis_sink_trims_to_cap(clock) -> None:
    fake = _FakeRedis()
    sink = RedisNotificationSink(fake, clock=clock, max_per_recipient=2)
    for n in range(4):
        sink.send("s1", f"m{n}")
    assert [n.message for n in sink.for_recipient("s1")] == ["m2", "m3"]


def test_redis_sink_swallows_delivery_errors(clock, caplog) -> None:
    sink = RedisNotificationSink(_FakeRedis(fail=True), clock=clock)
    sink.send("s1", "lost")  # must not raise
    assert "Notification to s1 dropped" in caplog.text


def test_redis_sink_read_failure_returns_empty_log(clock, caplog) -> None:
    sink = RedisNotificationSink(_FakeRedis(fail=True), clock=clock)
    assert sink.for_recipient("s1") == []
    assert "Notification log for s1 unavailable" in caplog.text
