"""
Log sinks. A sink is any callable taking one formatted message.

Diagnostics are advisory: `emit` never lets a failing sink change the outcome
of the operation that produced the message.
"""
import logging
import sys
from typing import Callable, Optional

LogSink = Callable[[str], None]

PREFIX = "[GLSL]"


def disabled_logging(message: str) -> None:
    pass


class StdioLogging:
    """Writes messages to stdout (`log`) or stderr (`log_as_error`)."""

    @staticmethod
    def log(message: str) -> None:
        print(f"{PREFIX} Warning: {message}")

    @staticmethod
    def log_as_error(message: str) -> None:
        print(f"{PREFIX} Error: {message}", file=sys.stderr)


def logger_sink(logger: Optional[logging.Logger] = None) -> LogSink:
    """Routes messages to a stdlib logger at WARNING level."""
    logger = logger or logging.getLogger("glslinclude")

    def _sink(message: str) -> None:
        logger.warning(message)

    return _sink


def emit(sink: Optional[LogSink], message: str) -> None:
    if sink is None:
        return
    try:
        sink(message)
    except Exception:
        # a broken sink must not turn a diagnostic into a failure
        pass


def sink_for(target: Optional[str]) -> LogSink:
    if target in (None, "none"):
        return disabled_logging
    if target == "stdout":
        return StdioLogging.log
    if target == "stderr":
        return StdioLogging.log_as_error
    if target == "logging":
        return logger_sink()
    raise ValueError(f"Unknown log target '{target}'. Must be one of ['none', 'stdout', 'stderr', 'logging']")
