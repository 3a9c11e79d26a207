from __future__ import annotations

import logging
import uuid
from typing import Any, Optional, Protocol

from ..common.datetime_utils import now_local
from ..core.constants import OFFLINE_QUEUE_KEY
from ..core.enums import ClockAction
from ..core.exceptions import AuthorizationError, DomainError, ValidationError
from ..stores.storage import KeyValueStorage
from .model import QueuedAction

log = logging.getLogger(__name__)


class AttendanceRecorder(Protocol):
    def record(self, action: ClockAction, *, timestamp: str, data: dict[str, Any]) -> None:
        raise NotImplementedError


class OfflineQueue:
    """Clock actions captured without connectivity, kept in device storage."""

    def __init__(self, storage: KeyValueStorage, *, key: str = OFFLINE_QUEUE_KEY):
        self._storage = storage
        self._key = key

    def get_queue(self) -> list[QueuedAction]:
        raw = self._storage.get_item(self._key)
        if not isinstance(raw, list):
            return []
        items = []
        for entry in raw:
            try:
                items.append(QueuedAction.from_dict(entry))
            except (KeyError, TypeError, ValueError):
                log.warning("dropping malformed queued action: %r", entry)
        return items

    def enqueue(self, action: ClockAction, data: Optional[dict[str, Any]] = None) -> QueuedAction:
        item = QueuedAction(
            id=uuid.uuid4().hex[:8],
            type=action,
            timestamp=now_local().isoformat(),
            data=dict(data or {}),
        )
        queue = self.get_queue()
        queue.append(item)
        self._write(queue)
        log.info("action queued offline: %s", item.id)
        return item

    def clear_queue(self) -> None:
        self._storage.remove_item(self._key)

    def flush(self, recorder: AttendanceRecorder) -> int:
        """Replay queued actions in order.

        A server rejection (validation or permission) drops that action and
        moves on; any other failure stops the sync and keeps the rest queued.
        Returns how many were sent.
        """
        queue = self.get_queue()
        sent = 0
        done = 0
        for item in queue:
            try:
                recorder.record(item.type, timestamp=item.timestamp, data=item.data)
            except (ValidationError, AuthorizationError) as e:
                log.error("offline action %s rejected, dropping it: %s", item.id, e)
                done += 1
                continue
            except DomainError as e:
                log.warning("offline sync stopped at %s: %s", item.id, e)
                break
            sent += 1
            done += 1

        remaining = queue[done:]
        if remaining:
            self._write(remaining)
        else:
            self.clear_queue()
        return sent

    def _write(self, queue: list[QueuedAction]) -> None:
        self._storage.set_item(self._key, [item.to_dict() for item in queue])
