"""Analytics sinks for product events."""

from __future__ import annotations

from forgepr.logging import get_logger


class LoggingAnalytics:
    """Records analytics events as structured log lines."""

    def __init__(self, source: str = "forgepr") -> None:
        self._source = source
        self._log = get_logger("forgepr.analytics")

    def capture(self, event: str) -> None:
        """Record a named event."""
        self._log.info("analytics_event", analytics_event=event, source=self._source)
