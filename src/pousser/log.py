"""Logging sink used by the client for internal messages.

The client reports through a small ``(template, context, level)`` interface
instead of a global logger, so applications can route messages anywhere.
The default sink forwards to the standard ``logging`` module.

Templates use ``{name}`` or ``{{name}}`` placeholders filled from the
context mapping:

    >>> render("exec {{status}} response: {body}", {"status": 200, "body": "{}"})
    'exec 200 response: {}'
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable

logger = logging.getLogger("pousser")

_PLACEHOLDER = re.compile(r"\{\{(\w+)\}\}|\{(\w+)\}")


@runtime_checkable
class LogSink(Protocol):
    """Anything that can receive client log messages."""

    def log(self, template: str, context: Mapping[str, Any], level: int) -> None: ...


def render(template: str, context: Mapping[str, Any]) -> str:
    """Fill placeholders from context; unknown placeholders are left as-is."""

    def _replace(match: re.Match[str]) -> str:
        name = match.group(1) or match.group(2)
        if name in context:
            return str(context[name])
        return match.group(0)

    return _PLACEHOLDER.sub(_replace, template)


class LoggingSink:
    """Sink that forwards rendered messages to a ``logging.Logger``."""

    def __init__(self, target: logging.Logger | None = None):
        self.logger = target or logger

    def log(self, template: str, context: Mapping[str, Any], level: int) -> None:
        if not self.logger.isEnabledFor(level):
            return
        self.logger.log(level, render(template, context), extra={"context": dict(context)})


class NullSink:
    """Sink that discards everything."""

    def log(self, template: str, context: Mapping[str, Any], level: int) -> None:
        pass


class Log:
    """Front end the client logs through; the sink can be swapped at runtime."""

    def __init__(self, sink: LogSink | logging.Logger | None = None):
        self.sink: LogSink = LoggingSink()
        if sink is not None:
            self.set_logger(sink)

    def set_logger(self, sink: LogSink | logging.Logger) -> None:
        """Replace the sink.

        Args:
            sink: A ``LogSink`` or a plain ``logging.Logger`` (wrapped).

        Raises:
            TypeError: If ``sink`` is neither.
        """
        if isinstance(sink, logging.Logger):
            self.sink = LoggingSink(sink)
        elif isinstance(sink, LogSink):
            self.sink = sink
        else:
            raise TypeError(f"Logger must be a LogSink or logging.Logger, got: {type(sink)}")

    def log(
        self,
        template: str,
        context: Mapping[str, Any] | None = None,
        level: int = logging.DEBUG,
    ) -> None:
        self.sink.log(template, context or {}, level)
