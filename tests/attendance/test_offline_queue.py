from __future__ import annotations

from workforce_portal.attendance.offline_queue import OfflineQueue
from workforce_portal.core.enums import ClockAction
from workforce_portal.core.exceptions import AuthorizationError, DomainError, RateLimitedError, ValidationError
from workforce_portal.stores.storage import JsonFileStorage


class RecordingRecorder:
    def __init__(self, fail_on: int | None = None, error: DomainError | None = None):
        self.fail_on = fail_on
        self.error = error or DomainError("offline again")
        self.calls = 0
        self.sent = []

    def record(self, action, *, timestamp, data):
        call = self.calls
        self.calls += 1
        if self.fail_on is not None and call == self.fail_on:
            raise self.error
        self.sent.append((action, timestamp, data))


def test_enqueue_persists_across_instances(tmp_path):
    queue = OfflineQueue(JsonFileStorage(tmp_path))
    item = queue.enqueue(ClockAction.CLOCK_IN, {"method": "MANUAL"})

    items = OfflineQueue(JsonFileStorage(tmp_path)).get_queue()
    assert items == [item]
    assert len(item.id) == 8
    assert JsonFileStorage(tmp_path).get_item("offline_attendance_queue")[0]["type"] == "clockIn"


def test_clear_queue(storage):
    queue = OfflineQueue(storage)
    queue.enqueue(ClockAction.CLOCK_IN)
    queue.clear_queue()
    assert queue.get_queue() == []


def test_flush_sends_in_order_and_empties(storage):
    queue = OfflineQueue(storage)
    first = queue.enqueue(ClockAction.CLOCK_IN)
    second = queue.enqueue(ClockAction.CLOCK_OUT)
    recorder = RecordingRecorder()

    assert queue.flush(recorder) == 2
    assert [s[0] for s in recorder.sent] == [ClockAction.CLOCK_IN, ClockAction.CLOCK_OUT]
    assert [s[1] for s in recorder.sent] == [first.timestamp, second.timestamp]
    assert queue.get_queue() == []


def test_flush_keeps_remainder_after_failure(storage):
    queue = OfflineQueue(storage)
    queue.enqueue(ClockAction.CLOCK_IN)
    pending = queue.enqueue(ClockAction.CLOCK_OUT)

    assert queue.flush(RecordingRecorder(fail_on=1)) == 1
    assert queue.get_queue() == [pending]


def test_malformed_entries_are_dropped(storage):
    storage.set_item("offline_attendance_queue", [{"id": "x"}, {"id": "ok", "type": "clockOut", "timestamp": "t"}])
    items = OfflineQueue(storage).get_queue()
    assert [i.id for i in items] == ["ok"]


def test_flush_drops_rejected_action_and_continues(storage):
    queue = OfflineQueue(storage)
    queue.enqueue(ClockAction.CLOCK_IN)
    queue.enqueue(ClockAction.CLOCK_OUT)
    recorder = RecordingRecorder(fail_on=0, error=ValidationError("Already clocked in today"))

    assert queue.flush(recorder) == 1
    assert [s[0] for s in recorder.sent] == [ClockAction.CLOCK_OUT]
    assert queue.get_queue() == []


def test_flush_drops_forbidden_action(storage):
    queue = OfflineQueue(storage)
    queue.enqueue(ClockAction.CLOCK_IN, {"method": "MANUAL"})

    assert queue.flush(RecordingRecorder(fail_on=0, error=AuthorizationError("Biometric required"))) == 0
    assert queue.get_queue() == []


def test_flush_keeps_everything_when_rate_limited(storage):
    queue = OfflineQueue(storage)
    first = queue.enqueue(ClockAction.CLOCK_IN)
    second = queue.enqueue(ClockAction.CLOCK_OUT)

    assert queue.flush(RecordingRecorder(fail_on=0, error=RateLimitedError("Too many requests"))) == 0
    assert queue.get_queue() == [first, second]
