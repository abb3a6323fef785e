"""Trace sinks for pipeline progress."""

from __future__ import annotations

import logging
from typing import Any, Protocol, runtime_checkable

logger = logging.getLogger("email_parser")


@runtime_checkable
class Tracer(Protocol):
    """Protocol for side-channel progress tracing."""

    def trace(self, message: str, **context: Any) -> None: ...


class LoggingTracer:
    """Tracer that writes each event to the ``email_parser`` logger."""

    def __init__(self, level: int = logging.INFO) -> None:
        self.level = level

    def trace(self, message: str, **context: Any) -> None:
        if context:
            details = ", ".join(f"{key}={value}" for key, value in sorted(context.items()))
            logger.log(self.level, "%s (%s)", message, details)
        else:
            logger.log(self.level, "%s", message)


class NullTracer:
    """Tracer that discards every event."""

    def trace(self, message: str, **context: Any) -> None:
        pass
