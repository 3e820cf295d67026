"""
NetTrust Structured Logger
===========================

Provides :class:`TrustLogger`, a component-bound logging facade over the
standard library.  All NetTrust loggers are children of the ``nettrust``
logger, so sinks are installed once on that parent by
:func:`configure_logging` and every component (``core.engine``,
``analyzers.rules`` ...) shares them:

    - a Rich console handler on stderr,
    - an optional rotating file handler writing plain text or JSON lines.

Records carry the ``component`` and the current ``operation`` so the JSON
sink can be filtered per detector stage.

References:
    - Python logging HOWTO. https://docs.python.org/3/howto/logging.html
    - Python Logging Cookbook, "Using LoggerAdapters to impart contextual
      information".
    - Rich library. https://github.com/Textualize/rich
"""

from __future__ import annotations

import json
import logging
import threading
import time
from contextlib import contextmanager
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Iterator, MutableMapping

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

ROOT_LOGGER_NAME = "nettrust"

_LEVEL_STYLES = Theme(
    {
        "logging.level.debug": "dim cyan",
        "logging.level.info": "bright_blue",
        "logging.level.warning": "bold yellow",
        "logging.level.error": "bold red",
        "logging.level.critical": "bold white on red",
    }
)

_TEXT_FORMAT = "%(asctime)s %(levelname)-8s [%(component)s] %(message)s"

# Handlers installed by configure_logging(), replaced on every call.
_installed: list[logging.Handler] = []
_install_lock = threading.Lock()


# ---------------------------------------------------------------------------
# Formatters & handlers
# ---------------------------------------------------------------------------


class _JSONLinesFormatter(logging.Formatter):
    """One JSON object per record: time, level, component, operation, message."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "component": getattr(record, "component", record.name),
            "message": record.getMessage(),
        }
        operation = getattr(record, "operation", None)
        if operation:
            entry["operation"] = operation
        fields = getattr(record, "fields", None)
        if fields:
            entry["fields"] = fields
        if record.exc_info and record.exc_info[1] is not None:
            entry["traceback"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


def _with_component(record: logging.LogRecord) -> bool:
    # records from plain stdlib loggers under "nettrust" have no component
    if not hasattr(record, "component"):
        record.component = record.name
    return True


def _console_handler(level: int) -> logging.Handler:
    handler = RichHandler(
        console=Console(theme=_LEVEL_STYLES, stderr=True),
        level=level,
        show_path=False,
        rich_tracebacks=True,
        markup=False,
    )
    handler.setFormatter(logging.Formatter("[%(component)s] %(message)s"))
    return handler


def _file_handler(
    path: Path, level: int, json_lines: bool, max_bytes: int, backups: int
) -> logging.Handler:
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        path, maxBytes=max_bytes, backupCount=backups, encoding="utf-8"
    )
    handler.setLevel(level)
    if json_lines:
        handler.setFormatter(_JSONLinesFormatter())
    else:
        handler.setFormatter(logging.Formatter(_TEXT_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S%z"))
    return handler


def configure_logging(
    log_level: str = "INFO",
    log_file: str | Path | None = None,
    json_logs: bool = False,
    console_output: bool = True,
    *,
    max_bytes: int = 10_485_760,
    backup_count: int = 5,
) -> None:
    """Install the NetTrust sinks on the ``nettrust`` parent logger.

    Calling it again replaces the previous sinks, so the CLI can apply
    the configuration file after modules have created their loggers.

    Args:
        log_level:      Minimum severity name (``DEBUG`` ... ``CRITICAL``).
        log_file:       Rotating log file path; ``None`` or empty disables it.
        json_logs:      Write JSON lines to the file instead of plain text.
        console_output: Attach the Rich console handler.
        max_bytes:      File size that triggers rotation.
        backup_count:   Rotated files to keep.
    """
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    root = logging.getLogger(ROOT_LOGGER_NAME)
    with _install_lock:
        for handler in _installed:
            root.removeHandler(handler)
            handler.close()
        _installed.clear()

        if console_output:
            _installed.append(_console_handler(level))
        if log_file:
            _installed.append(
                _file_handler(Path(log_file), level, json_logs, max_bytes, backup_count)
            )
        if not _installed:
            _installed.append(logging.NullHandler())

        for handler in _installed:
            handler.addFilter(_with_component)
            root.addHandler(handler)
        root.setLevel(level)
        root.propagate = False


# ---------------------------------------------------------------------------
# TrustLogger
# ---------------------------------------------------------------------------


class TrustLogger(logging.LoggerAdapter):
    """Logger bound to one NetTrust component.

    Keyword arguments that are not standard ``logging`` arguments are
    collected into a ``fields`` mapping on the record, which the JSON
    sink writes out::

        log = TrustLogger("core.engine")
        log.info("Model loaded", features=25)
        with log.operation("detect_batch"):
            log.debug("Grouping %d observations", n)
    """

    _STANDARD_KWARGS = frozenset({"exc_info", "stack_info", "stacklevel", "extra"})

    def __init__(self, component: str) -> None:
        super().__init__(logging.getLogger(f"{ROOT_LOGGER_NAME}.{component}"), {})
        self.component = component
        self._local = threading.local()

    def process(
        self, msg: Any, kwargs: MutableMapping[str, Any]
    ) -> tuple[Any, MutableMapping[str, Any]]:
        fields = {k: kwargs.pop(k) for k in list(kwargs) if k not in self._STANDARD_KWARGS}
        extra = dict(kwargs.get("extra") or {})
        extra["component"] = self.component
        extra["operation"] = getattr(self._local, "operation", None)
        if fields:
            extra["fields"] = fields
        kwargs["extra"] = extra
        return msg, kwargs

    @contextmanager
    def operation(self, name: str) -> Iterator[TrustLogger]:
        """Tag records logged by this thread inside the block with *name*."""
        previous = getattr(self._local, "operation", None)
        self._local.operation = name
        try:
            yield self
        finally:
            self._local.operation = previous

    @contextmanager
    def timed(self, label: str, level: int = logging.DEBUG) -> Iterator[None]:
        """Log how long the block took."""
        start = time.perf_counter()
        try:
            yield
        finally:
            self.log(level, "%s finished in %.3fs", label, time.perf_counter() - start)


# Default sinks until the CLI applies its configuration.
configure_logging()
