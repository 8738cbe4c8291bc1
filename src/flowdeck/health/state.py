"""Observable health indicator."""

import logging
from collections.abc import Callable
from datetime import datetime, timezone

from flowdeck.models import HealthStatus

logger = logging.getLogger(__name__)

HealthListener = Callable[[HealthStatus], None]


class HealthState:
    """
    Last known reachability of the automation server.

    Starts as UNKNOWN. Written once per probe call (last writer wins);
    listeners are called after every write, even if the value is unchanged.
    """

    def __init__(self) -> None:
        self._status = HealthStatus.UNKNOWN
        self._updated_at: datetime | None = None
        self._listeners: list[HealthListener] = []

    @property
    def status(self) -> HealthStatus:
        return self._status

    @property
    def updated_at(self) -> datetime | None:
        return self._updated_at

    def set(self, status: HealthStatus) -> None:
        self._status = status
        self._updated_at = datetime.now(timezone.utc)
        for listener in list(self._listeners):
            try:
                listener(status)
            except Exception as e:
                logger.warning("Health listener failed: %s", e, exc_info=True)

    def subscribe(self, listener: HealthListener) -> Callable[[], None]:
        """Register listener; returns a callable that unsubscribes it."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe
