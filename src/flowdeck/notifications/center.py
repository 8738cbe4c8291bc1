"""In-memory notification feed with pluggable sinks."""

import asyncio
import itertools
import logging
from collections import deque
from typing import Protocol

from flowdeck.models import Notification, NotificationLevel

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_SIZE = 100


class NotificationSink(Protocol):
    """Anything that can forward a notification somewhere else."""

    def publish(self, notification: Notification) -> bool: ...


class NotificationCenter:
    """
    Collects notifications for display.

    Keeps the newest max_history entries so a polling client can fetch
    what it has not seen yet (since), logs each one, and forwards it to
    every sink. A failing sink is logged and skipped. Inside a running
    event loop sinks are called on a worker thread so a slow sink never
    stalls the loop; flush() waits for those deliveries.
    """

    def __init__(
        self,
        sinks: list[NotificationSink] | None = None,
        max_history: int = DEFAULT_HISTORY_SIZE,
    ) -> None:
        self._sinks = list(sinks or [])
        self._history: deque[Notification] = deque(maxlen=max(1, max_history))
        self._ids = itertools.count(1)
        self._pending: set[asyncio.Task] = set()

    def success(self, text: str, flow_key: str | None = None) -> Notification:
        return self.notify(NotificationLevel.SUCCESS, text, flow_key=flow_key)

    def error(self, text: str, flow_key: str | None = None) -> Notification:
        return self.notify(NotificationLevel.ERROR, text, flow_key=flow_key)

    def notify(
        self,
        level: NotificationLevel,
        text: str,
        flow_key: str | None = None,
    ) -> Notification:
        """Record, log and forward one notification."""
        notification = Notification(id=next(self._ids), level=level, text=text, flow_key=flow_key)
        self._history.append(notification)
        log_level = logging.INFO if level == NotificationLevel.SUCCESS else logging.WARNING
        logger.log(log_level, "Notification: %s", text, extra={"flow_key": flow_key})
        self._forward(notification)
        return notification

    def _forward(self, notification: Notification) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            loop = None
        for sink in self._sinks:
            if loop is None:
                self._publish(sink, notification)
                continue
            task = loop.create_task(asyncio.to_thread(self._publish, sink, notification))
            self._pending.add(task)
            task.add_done_callback(self._pending.discard)

    @staticmethod
    def _publish(sink: NotificationSink, notification: Notification) -> None:
        try:
            sink.publish(notification)
        except Exception as e:
            logger.warning("Notification sink %r failed: %s", sink, e, exc_info=True)

    async def flush(self) -> None:
        """Wait for sink deliveries started from the event loop."""
        while self._pending:
            await asyncio.gather(*list(self._pending))

    def since(self, after_id: int = 0) -> list[Notification]:
        """Notifications with id greater than after_id, oldest first."""
        return [n for n in self._history if n.id > after_id]

    def recent(self, limit: int = 10) -> list[Notification]:
        """Newest notifications, oldest first."""
        if limit <= 0:
            return []
        return list(self._history)[-limit:]

    def clear(self) -> None:
        self._history.clear()
