"""
Store Event Logger

DESIGN DECISION: The store reports every mutation and every failure
to a diagnostic sink instead of raising. This gives:
1. A trace of what was written, and when
2. Debugging capability when a write soft-fails
3. A single place to route diagnostics

The event logger:
- Is async so it can sit in the store's call path unchanged
- Never lets a logging failure break a store operation
"""

import logging
from typing import Optional

import structlog

from journeyscopes.models.events import StoreEvent, StoreEventSeverity


_configured = False


def configure_logging(level: str = "INFO", json_output: bool = True) -> None:
    """
    Configure structlog on top of the stdlib logging module.

    Safe to call more than once; later calls replace the configuration.
    """
    global _configured

    logging.basicConfig(format="%(message)s", level=getattr(logging, level.upper()))
    logging.getLogger("journeyscopes").setLevel(level.upper())

    renderer = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    _configured = True


def is_configured() -> bool:
    return _configured


class StoreEventLogger:
    """
    Diagnostic sink for store events.

    Logs each event through structlog at the event's severity and
    remembers the most recent events for inspection.
    """

    def __init__(self, history_size: int = 100):
        self._logger = structlog.get_logger("journeyscopes.store")
        self._history: list[StoreEvent] = []
        self._history_size = history_size

    @property
    def history(self) -> list[StoreEvent]:
        """Most recent events, oldest first."""
        return list(self._history)

    def _remember(self, event: StoreEvent) -> None:
        self._history.append(event)
        if len(self._history) > self._history_size:
            del self._history[: len(self._history) - self._history_size]

    async def log(self, event: StoreEvent) -> bool:
        """
        Log a store event.

        Returns False if the log call itself failed.
        """
        self._remember(event)
        log_dict = event.to_log_dict()

        try:
            if event.severity == StoreEventSeverity.ERROR:
                self._logger.error("store_event", **log_dict)
            elif event.severity == StoreEventSeverity.WARNING:
                self._logger.warning("store_event", **log_dict)
            elif event.severity == StoreEventSeverity.DEBUG:
                self._logger.debug("store_event", **log_dict)
            else:
                self._logger.info("store_event", **log_dict)
        except (ValueError, TypeError, OSError) as e:
            # Diagnostics must never break the operation being logged
            logging.getLogger(__name__).warning(
                "Failed to log store event %s: %s", event.event_id, e
            )
            return False

        return True

    def events_for_key(self, key: Optional[str]) -> list[StoreEvent]:
        """Remembered events about one storage key."""
        return [event for event in self._history if event.key == key]
