"""Change-notification bridge between a persisted collection and its observers."""

from typing import Any, Callable

from storefront.logging import get_logger

logger = get_logger(__name__)

Listener = Callable[[Any], None]


class ChangeBroadcaster:
    """
    Synchronous in-process publish/subscribe.

    Owned by the store it announces changes for, so listeners go away with
    the store. Listeners run in subscription order; one that raises is logged
    and skipped.
    """

    def __init__(self, name: str = "change"):
        self.name = name
        self._listeners: list[Listener] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener; returns a callable that unsubscribes it."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            self.unsubscribe(listener)

        return _unsubscribe

    def unsubscribe(self, listener: Listener) -> None:
        try:
            self._listeners.remove(listener)
        except ValueError:
            pass

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def publish(self, payload: Any) -> None:
        # Copy so a listener may unsubscribe itself during delivery
        for listener in list(self._listeners):
            try:
                listener(payload)
            except Exception:
                logger.exception("Listener failed on %s event", self.name)
