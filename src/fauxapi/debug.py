"""Debug instrumentation.

When ``MockConfig.debug`` is on, every request stage is traced to the
``fauxapi.debug`` logger at DEBUG level, tagged with a category and
carrying the stage data as structured ``extra`` fields. When off, every
method returns immediately and nothing is recorded.

Enable the output with standard logging configuration::

    logging.getLogger("fauxapi.debug").setLevel(logging.DEBUG)
"""

import logging
import time
from typing import Any

logger = logging.getLogger("fauxapi.debug")


class DebugLogger:
    """Category-tagged tracer. A pure observer: it never alters behaviour."""

    __slots__ = ("_enabled", "_timers")

    def __init__(self, enabled: bool = False) -> None:
        self._enabled = enabled
        self._timers: dict[str, float] = {}

    @property
    def enabled(self) -> bool:
        return self._enabled

    def log(self, category: str, message: str, **data: Any) -> None:
        if not self._enabled:
            return
        suffix = f" {data}" if data else ""
        logger.debug(
            "[FAUXAPI:%s] %s%s",
            category.upper(),
            message,
            suffix,
            extra={"fauxapi_category": category, "fauxapi_data": data},
        )

    def time(self, label: str) -> None:
        if not self._enabled:
            return
        self._timers[label] = time.perf_counter()

    def time_end(self, label: str) -> float | None:
        """Stop the timer for *label* and log the elapsed milliseconds."""
        if not self._enabled:
            return None
        started = self._timers.pop(label, None)
        if started is None:
            return None
        elapsed_ms = (time.perf_counter() - started) * 1000
        self.log("timing", f"{label}: {elapsed_ms:.3f}ms", elapsed_ms=elapsed_ms)
        return elapsed_ms
