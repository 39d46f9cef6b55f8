"""Logging and profiling for the text engine, built on telelog.

Public surface:

``configure(...)`` -- adopt an explicit ``telelog.Config`` or a named preset
``get_logger(name)`` -- fetch (and cache) a configured logger
``record_event(name, ...)`` -- emit a structured event at a chosen level
``span(name, ...)`` -- profile a block and optionally track it as a component

Settings are read from ``SPLICETEXT_*`` environment variables when the module
is first imported; call ``configure`` again after changing them.
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, MutableMapping, Optional, Tuple, cast

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

ENV_PREFIX = "SPLICETEXT_"

_LOGGER_CACHE: MutableMapping[str, Any] = {}
_ACTIVE_CONFIG: Optional[Any] = None


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    return os.getenv(f"{ENV_PREFIX}{name}", default)


def _env_flag(name: str, default: bool) -> bool:
    raw = _env(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


@dataclass(slots=True)
class TelemetrySettings:
    """Plain description of how loggers should be built."""

    logger_name: str = "splicetext"
    level: str = "INFO"
    console: bool = True
    colored: bool = True
    json_format: bool = False
    log_file: str = ""
    buffered: bool = False
    buffer_size: int = 2048

    @classmethod
    def from_env(cls) -> "TelemetrySettings":
        return cls(
            logger_name=_env("LOGGER") or "splicetext",
            level=(_env("LOG_LEVEL") or "INFO").upper(),
            console=not _env_flag("DISABLE_CONSOLE", False),
            colored=not _env_flag("NO_COLOR", False),
            json_format=_env_flag("LOG_JSON", False),
            log_file=_env("LOG_FILE") or "",
            buffered=_env_flag("LOG_BUFFERED", False),
            buffer_size=int(_env("LOG_BUFFER_SIZE") or "2048"),
        )


_PRESETS: Dict[str, Dict[str, Any]] = {
    "development": {"level": "DEBUG", "console": True, "colored": True},
    "production": {
        "level": "INFO",
        "console": False,
        "buffered": True,
        "log_file": "splicetext.log",
    },
    "performance": {
        "level": "DEBUG",
        "console": False,
        "buffered": True,
        "json_format": True,
        "log_file": "splicetext-performance.log",
    },
}


def settings_for_preset(preset: str) -> TelemetrySettings:
    key = preset.strip().lower()
    if key == "performance_analysis":
        key = "performance"
    if key not in _PRESETS:
        raise ValueError(f"Unknown preset '{preset}'.")
    settings = TelemetrySettings.from_env()
    for name, value in _PRESETS[key].items():
        if name == "log_file" and settings.log_file:
            continue
        setattr(settings, name, value)
    return settings


def build_config(settings: TelemetrySettings) -> Any:
    """Translate ``settings`` into a ``telelog.Config``."""

    config = tl.Config()
    config.with_min_level(settings.level)
    config.with_console_output(settings.console)
    if settings.console:
        config.with_colored_output(settings.colored)
    config.with_json_format(settings.json_format)
    if settings.log_file:
        config.with_file_output(settings.log_file)
    if settings.buffered:
        config.with_buffering(True)
        config.with_buffer_size(settings.buffer_size)
    # spans rely on logger.profile
    config.with_profiling(True)
    return config


def configure(*, config: Optional[Any] = None, preset: Optional[str] = None) -> None:
    """Replace the active telelog configuration.

    ``config`` and ``preset`` are mutually exclusive; with neither, settings
    are re-read from the environment (``SPLICETEXT_PRESET`` included).
    """

    global _ACTIVE_CONFIG
    if config is not None and preset:
        raise ValueError("Provide either `config` or `preset`, not both.")

    if config is None:
        preset = preset or _env("PRESET")
        settings = settings_for_preset(preset) if preset else TelemetrySettings.from_env()
        config = build_config(settings)
    else:
        config.with_profiling(True)

    _ACTIVE_CONFIG = config
    _LOGGER_CACHE.clear()


def _ensure_config() -> Any:
    if _ACTIVE_CONFIG is None:
        configure()
    return _ACTIVE_CONFIG


def get_logger(name: Optional[str] = None) -> Any:
    """Return a cached ``telelog.Logger`` using the active configuration."""

    logger_name = name or _env("LOGGER") or "splicetext"
    logger = _LOGGER_CACHE.get(logger_name)
    if logger is None:
        logger = tl.Logger.with_config(logger_name, _ensure_config())
        _LOGGER_CACHE[logger_name] = logger
    return logger


def _stringify(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (dict, list, tuple, set)):
        return repr(value)
    return str(value)


def _pairs(data: Dict[str, Any]) -> list[tuple[str, str]]:
    return [(str(key), _stringify(value)) for key, value in data.items()]


def _level_method(logger: Any, level: str) -> Tuple[Any, bool]:
    """Return the logging method for ``level`` and whether it takes pairs."""

    name = str(level).lower()
    structured = getattr(logger, f"{name}_with", None)
    if structured is not None:
        return structured, True
    plain = getattr(logger, name, None)
    if plain is None:
        raise ValueError(f"Unsupported log level '{level}'.")
    return plain, False


def _emit(logger: Any, level: str, message: str, payload: Dict[str, Any]) -> None:
    method, structured = _level_method(logger, level)
    if structured:
        method(message, _pairs(payload))
    else:
        method(f"{message} {payload}")


def record_event(
    name: str,
    *,
    level: str = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    """Emit ``event::<name>`` with ``data`` attached as key/value pairs."""

    _emit(get_logger(logger_name), level, f"event::{name}", {"event": name, **(data or {})})


@dataclass
class SpanHandle:
    """Yielded by ``span`` so the block can attach metadata or report failure."""

    logger: Any
    span_name: str
    component_name: Optional[str] = None
    metadata: Dict[str, str] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = _stringify(value)

    def fail(self, reason: str) -> None:
        payload: Dict[str, Any] = {"span": self.span_name, **self.metadata, "reason": reason}
        if self.component_name:
            payload["component"] = self.component_name
        _emit(self.logger, "error", "span::fail", payload)


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str | bool] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Profile the enclosed block.

    ``component=True`` tracks the block under ``name``; a string tracks it
    under that component name. ``metadata`` is attached as logger context for
    the duration of the block. Exceptions are reported with ``span::fail``
    and re-raised.
    """

    log = get_logger(logger_name)
    if component is True:
        component_name: Optional[str] = name
    elif isinstance(component, str):
        component_name = component
    else:
        component_name = None

    context = {key: _stringify(value) for key, value in (metadata or {}).items()}
    for key, value in context.items():
        log.add_context(key, value)

    handle = SpanHandle(
        logger=log, span_name=name, component_name=component_name, metadata=dict(context)
    )
    try:
        with ExitStack() as stack:
            if component_name:
                stack.enter_context(log.track_component(component_name))
            stack.enter_context(log.profile(name))
            try:
                yield handle
            except Exception as exc:
                handle.fail(str(exc))
                raise
    finally:
        for key in context:
            log.remove_context(key)


__all__ = [
    "SpanHandle",
    "TelemetrySettings",
    "build_config",
    "configure",
    "get_logger",
    "record_event",
    "settings_for_preset",
    "span",
]
