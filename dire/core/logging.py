"""
Structured logging for DIRE, filtered by channel and verbosity.

Every message belongs to a channel:
- PIPELINE: batch runs and per-rule timing
- RULE: rewrites performed by individual rules
- VOCAB: dataset loading and unresolved terms
- GROUPS: group tree and selection profiles
- STORE: journal reads and writes
- SYSTEM: anything else (API requests, startup)

Verbosity is one of silent < info < verbose < debug. Errors and warnings are
emitted at every level except silent, regardless of channel.

The environment supplies defaults when `configure_logging` is called
without arguments:
- DIRE_LOG_LEVEL: silent/info/verbose/debug
- DIRE_LOG_FORMAT: console or json
- DIRE_LOG_CHANNELS: comma-separated channel names (all when unset)

Output goes to stderr so stdout stays free for command output.
"""

import logging
import os
import sys
import time
from contextvars import ContextVar
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Any, Iterable, Optional, Union

import structlog


class LogLevel(IntEnum):
    SILENT = 0
    INFO = 1
    VERBOSE = 2
    DEBUG = 3

    @classmethod
    def from_string(cls, s: str) -> "LogLevel":
        """Parse a level name; stdlib names map to INFO, unknown names too."""
        try:
            return cls[s.strip().upper()]
        except KeyError:
            return cls.INFO


class LogChannel(str, Enum):
    PIPELINE = "PIPELINE"
    RULE = "RULE"
    VOCAB = "VOCAB"
    GROUPS = "GROUPS"
    STORE = "STORE"
    SYSTEM = "SYSTEM"

    @classmethod
    def all(cls) -> list["LogChannel"]:
        return list(cls)

    @classmethod
    def from_string(cls, s: str) -> Optional["LogChannel"]:
        """Parse a channel name, or None if there is no such channel."""
        return cls.__members__.get(s.strip().upper())


# Threshold handed to the stdlib root logger for each verbosity
_STDLIB_LEVELS = {
    LogLevel.SILENT: logging.CRITICAL + 10,
    LogLevel.INFO: logging.INFO,
    LogLevel.VERBOSE: logging.DEBUG,
    LogLevel.DEBUG: logging.DEBUG,
}


@dataclass
class _LogSettings:
    level: LogLevel = LogLevel.INFO
    format: str = "console"
    channels: set[LogChannel] = field(default_factory=lambda: set(LogChannel))
    configured: bool = False


_settings = _LogSettings()

# Fields bound for the duration of a run or request
_context: ContextVar[dict] = ContextVar("dire_log_context", default={})


def _resolve_level(level: Union[LogLevel, str, None]) -> LogLevel:
    if level is None:
        level = os.environ.get("DIRE_LOG_LEVEL", "info")
    if isinstance(level, str):
        return LogLevel.from_string(level)
    return level


def _resolve_channels(channels: Optional[Iterable[Union[LogChannel, str]]]) -> set[LogChannel]:
    if channels is None:
        names = [n for n in os.environ.get("DIRE_LOG_CHANNELS", "").split(",") if n.strip()]
        resolved = {LogChannel.from_string(n) for n in names} - {None}
        return resolved or set(LogChannel)

    resolved = set()
    for channel in channels:
        if not isinstance(channel, LogChannel):
            channel = LogChannel.from_string(channel)
        if channel is not None:
            resolved.add(channel)
    return resolved


def _processors(format: str) -> list:
    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]
    if format == "json":
        processors += [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))
    return processors


def configure_logging(
    level: Union[LogLevel, str, None] = None,
    format: Optional[str] = None,
    channels: Optional[list[Union[LogChannel, str]]] = None,
    force: bool = False,
) -> None:
    """
    Configure verbosity, rendering and channel filter.

    Only the first call takes effect unless `force` is set; loggers call
    this lazily so importing a module is enough to get sane defaults.

    Args:
        level: Verbosity (enum or name); DIRE_LOG_LEVEL when None
        format: "console" or "json"; DIRE_LOG_FORMAT when None
        channels: Channels to emit; DIRE_LOG_CHANNELS (or all) when None
        force: Reconfigure even if already configured
    """
    if _settings.configured and not force:
        return

    _settings.level = _resolve_level(level)
    _settings.format = format or os.environ.get("DIRE_LOG_FORMAT", "console")
    _settings.channels = _resolve_channels(channels)

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=_STDLIB_LEVELS[_settings.level],
        force=True,
    )
    structlog.configure(
        processors=_processors(_settings.format),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    _settings.configured = True


class ChannelLogger:
    """
    structlog logger that knows its channel.

    info/verbose/debug are dropped when the channel is filtered out or the
    configured verbosity is lower. error/warning only respect silent.
    """

    def __init__(
        self,
        channel: LogChannel,
        name: Optional[str] = None,
        rule_id: Optional[str] = None,
    ):
        self.channel = channel
        self.name = name or f"dire.{channel.value.lower()}"
        self.rule_id = rule_id
        self._logger = structlog.get_logger(self.name)

    def _fields(self, extra: dict) -> dict:
        fields = {"channel": self.channel.value}
        if self.rule_id:
            fields["rule"] = self.rule_id
        fields.update(extra)
        fields.update(_context.get())
        return fields

    def _emit(self, threshold: LogLevel, method: str, event: str, extra: dict) -> None:
        if self.channel not in _settings.channels or _settings.level < threshold:
            return
        getattr(self._logger, method)(event, **self._fields(extra))

    def info(self, event: str, **kwargs) -> None:
        self._emit(LogLevel.INFO, "info", event, kwargs)

    def verbose(self, event: str, **kwargs) -> None:
        self._emit(LogLevel.VERBOSE, "debug", event, {"verbosity": "verbose", **kwargs})

    def debug(self, event: str, **kwargs) -> None:
        self._emit(LogLevel.DEBUG, "debug", event, {"verbosity": "debug", **kwargs})

    def error(self, event: str, **kwargs) -> None:
        if _settings.level > LogLevel.SILENT:
            self._logger.error(event, **self._fields(kwargs))

    def warning(self, event: str, **kwargs) -> None:
        if _settings.level > LogLevel.SILENT:
            self._logger.warning(event, **self._fields(kwargs))


def get_logger(channel: Union[LogChannel, str] = LogChannel.SYSTEM) -> ChannelLogger:
    """Logger for a channel (unknown names fall back to SYSTEM)."""
    configure_logging()
    if not isinstance(channel, LogChannel):
        channel = LogChannel.from_string(channel) or LogChannel.SYSTEM
    return ChannelLogger(channel=channel)


def get_rule_logger(rule_id: str) -> ChannelLogger:
    """Logger on the RULE channel that tags every message with the rule id."""
    configure_logging()
    return ChannelLogger(LogChannel.RULE, name=f"dire.rules.{rule_id}", rule_id=rule_id)


def bind_request_context(**kwargs) -> None:
    """Add fields to every message logged from the current context."""
    _context.set({**_context.get(), **kwargs})


def clear_request_context() -> None:
    _context.set({})


class RunLogger:
    """
    Logs one batch run on the PIPELINE channel.

    The run id is bound to the context on creation and cleared again by
    `run_complete`.
    """

    def __init__(self, run_id: str):
        self.run_id = run_id
        self._log = get_logger(LogChannel.PIPELINE)
        self._started = time.perf_counter()
        self._rule_started: dict[str, float] = {}
        bind_request_context(run_id=run_id)

    def run_start(self, documents: int, rules: list[str]) -> None:
        self._log.info("run_started", documents=documents, rules=rules)

    def rule_start(self, rule_id: str, document_id: str) -> None:
        self._rule_started[rule_id] = time.perf_counter()
        self._log.debug("rule_started", rule_id=rule_id, document_id=document_id)

    def rule_end(self, rule_id: str, document_id: str, changed: bool) -> None:
        elapsed = time.perf_counter() - self._rule_started.pop(rule_id, self._started)
        self._log.verbose(
            "rule_completed",
            rule_id=rule_id,
            document_id=document_id,
            changed=changed,
            duration_ms=round(elapsed * 1000, 2),
        )

    def rule_error(self, rule_id: str, document_id: str, error: Exception) -> None:
        self._rule_started.pop(rule_id, None)
        self._log.error(
            "rule_failed",
            rule_id=rule_id,
            document_id=document_id,
            error=str(error),
            error_type=type(error).__name__,
        )

    def run_complete(self, status: str, **metrics: Any) -> None:
        elapsed = time.perf_counter() - self._started
        self._log.info("run_complete", status=status, total_duration_ms=round(elapsed * 1000, 2), **metrics)
        clear_request_context()


def get_current_config() -> dict:
    """Current settings, for tests and diagnostics."""
    return {
        "level": _settings.level.name,
        "format": _settings.format,
        "channels": sorted(ch.value for ch in _settings.channels),
    }
