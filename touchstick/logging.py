"""
Touchstick Logging

Lightweight per-module logging for the stick engine and its input layer,
plus structured record sinks for tracing stick interactions.

Structured Record Logging:
    Press/Release transitions and gamepad connection edges can be written
    as JSON Lines to disk for later inspection. Nothing is recorded unless
    a sink is registered for the module or the module is enabled through
    TOUCHSTICK_LOGGING_<MODULE>_ENABLED (see ensure_sink).

Usage:
    from touchstick.logging import get_logger

    log = get_logger('engine')
    log.debug("Stick claimed")
    log.trace("Per-move detail")

    # Structured records
    from touchstick.logging import emit_record
    emit_record('sticks', {'type': 'press', 'stick': 'left', 'pointer': 3})

Configuration:
    Environment variables:
        TOUCHSTICK_LOG_LEVEL=DEBUG          # Global default level
        TOUCHSTICK_LOG_ENGINE=TRACE         # Module-specific level
        TOUCHSTICK_LOG_INPUT=INFO
        TOUCHSTICK_LOG_DIR=/tmp/sticks      # Where FileSink writes

        # Module-specific structured logging
        TOUCHSTICK_LOGGING_STICKS_ENABLED=true

    Or programmatically:
        from touchstick.logging import configure_logging
        configure_logging(level='DEBUG', modules={'gamepad': 'INFO'})
"""

import json
import os
import sys
import time
from abc import ABC, abstractmethod
from enum import IntEnum
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional, TextIO

ENV_PREFIX = 'TOUCHSTICK_LOG_'
ENV_MODULE_PREFIX = 'TOUCHSTICK_LOGGING_'


class LogLevel(IntEnum):
    """Log levels matching Python's logging module."""
    TRACE = 5      # Per-event detail (every drag move)
    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40
    CRITICAL = 50
    OFF = 100      # Disable logging


# =============================================================================
# Sink-Based Structured Logging
# =============================================================================

class LogSink(ABC):
    """
    Abstract base class for log record sinks.

    Sinks receive structured log records and write them to their destination.
    """

    @abstractmethod
    def emit(self, module: str, record: Dict[str, Any]) -> None:
        """
        Emit a structured log record.

        Args:
            module: Module name (e.g., 'sticks', 'gamepad')
            record: Structured data to log (must be JSON-serializable)
        """
        pass

    @abstractmethod
    def flush(self) -> None:
        """Flush any buffered records."""
        pass

    @abstractmethod
    def close(self) -> None:
        """Close the sink and release resources."""
        pass

    def __enter__(self) -> 'LogSink':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


class FileSink(LogSink):
    """
    Writes structured log records to JSONL files.

    Each module gets its own file in the log directory. A header record is
    written when a module's file is opened and a footer when the sink closes.

    Args:
        log_dir: Directory for log files (default: from get_log_dir())
        session_name: Session identifier for file naming (default: timestamp)
    """

    def __init__(
        self,
        log_dir: Optional[str] = None,
        session_name: Optional[str] = None,
    ):
        self._log_dir = Path(log_dir) if log_dir else None
        self._session_name = session_name or time.strftime("%Y%m%d_%H%M%S")
        self._files: Dict[str, TextIO] = {}

    def _ensure_dir(self) -> Path:
        """Lazily initialize log directory."""
        if self._log_dir is None:
            self._log_dir = Path(get_log_dir())
        self._log_dir.mkdir(parents=True, exist_ok=True)
        return self._log_dir

    def _path_for(self, module: str) -> Path:
        return self._ensure_dir() / f"{self._session_name}_{module}.jsonl"

    def _get_file(self, module: str) -> TextIO:
        """Get or create file handle for module."""
        if module not in self._files:
            handle = open(self._path_for(module), 'a')
            self._files[module] = handle
            header = {
                "type": "header",
                "module": module,
                "session_name": self._session_name,
                "start_time": time.time(),
            }
            handle.write(json.dumps(header) + "\n")
        return self._files[module]

    def emit(self, module: str, record: Dict[str, Any]) -> None:
        """Write record to module's JSONL file."""
        if 'wall_time' not in record:
            record = {'wall_time': time.time(), **record}
        self._get_file(module).write(json.dumps(record, default=str) + "\n")

    def flush(self) -> None:
        """Flush all open files."""
        for handle in self._files.values():
            handle.flush()

    def close(self) -> None:
        """Write footers and close all open files."""
        for module, handle in self._files.items():
            footer = {"type": "footer", "module": module, "end_time": time.time()}
            handle.write(json.dumps(footer) + "\n")
            handle.close()
        self._files.clear()

    @property
    def log_paths(self) -> Dict[str, Path]:
        """Get paths to all open log files."""
        return {module: self._path_for(module) for module in self._files}


class NullSink(LogSink):
    """No-op sink when structured logging is disabled."""

    def emit(self, module: str, record: Dict[str, Any]) -> None:
        pass

    def flush(self) -> None:
        pass

    def close(self) -> None:
        pass


# Sink registry - active sinks by module
_sinks: Dict[str, LogSink] = {}
_default_sink: Optional[LogSink] = None


def register_sink(module: str, sink: LogSink) -> None:
    """Register a sink for a specific module."""
    _sinks[module] = sink


def set_default_sink(sink: Optional[LogSink]) -> None:
    """Set the default sink for modules without specific sinks."""
    global _default_sink
    _default_sink = sink


def get_sink(module: str) -> Optional[LogSink]:
    """Get the sink for a module, or the default sink."""
    return _sinks.get(module, _default_sink)


def emit_record(module: str, record: Dict[str, Any]) -> bool:
    """
    Emit a structured log record to the appropriate sink.

    Returns:
        True if record was emitted, False if no sink available
    """
    sink = get_sink(module)
    if sink is None:
        return False
    sink.emit(module, record)
    return True


def close_all_sinks() -> None:
    """Close and unregister all sinks."""
    global _default_sink
    for sink in _sinks.values():
        sink.close()
    _sinks.clear()
    if _default_sink is not None:
        _default_sink.close()
        _default_sink = None


def create_sink_for_module(module: str, session_name: Optional[str] = None) -> LogSink:
    """
    Create the sink configured for a module.

    Returns a FileSink when TOUCHSTICK_LOGGING_<MODULE>_ENABLED is true,
    otherwise a NullSink.
    """
    config = get_module_config(module)
    if not config.get('enabled', False):
        return NullSink()
    return FileSink(log_dir=config.get('dir'), session_name=session_name)



def ensure_sink(module: str, session_name: Optional[str] = None) -> Optional[LogSink]:
    """
    Get the sink for a module, registering the configured one if needed.

    When no sink is registered and TOUCHSTICK_LOGGING_<MODULE>_ENABLED is
    true, a sink from create_sink_for_module() is registered first.
    """
    sink = get_sink(module)
    if sink is None and get_module_config(module).get('enabled', False):
        sink = create_sink_for_module(module, session_name)
        register_sink(module, sink)
    return sink


# =============================================================================
# Global configuration
# =============================================================================

_config: Dict[str, Any] = {
    'default_level': LogLevel.INFO,
    'module_levels': {},
    'log_dir': None,         # Override log directory (None = platform default)
    'modules': {},           # Per-module structured settings (hierarchical)
}


def get_log_dir() -> str:
    """Get the log directory.

    Priority:
    1. Configured log_dir (TOUCHSTICK_LOG_DIR at import time)
    2. Platform-specific user data directory:
       - macOS: ~/Library/Application Support/Touchstick/logs
       - Windows: %APPDATA%/Touchstick/logs
       - Linux: $XDG_DATA_HOME/touchstick/logs
    """
    if _config.get('log_dir'):
        return str(Path(_config['log_dir']).expanduser())

    if sys.platform == 'darwin':
        user_data = Path.home() / 'Library' / 'Application Support' / 'Touchstick'
    elif sys.platform == 'win32':
        user_data = Path(os.environ.get('APPDATA', str(Path.home()))) / 'Touchstick'
    else:
        xdg_data = os.environ.get('XDG_DATA_HOME', str(Path.home() / '.local' / 'share'))
        user_data = Path(xdg_data) / 'touchstick'

    return str(user_data / 'logs')


def get_module_config(module: str) -> Dict[str, Any]:
    """Get structured-logging settings for a module.

    TOUCHSTICK_LOGGING_STICKS_ENABLED=true maps to {'enabled': True}
    under the 'sticks' module.
    """
    return _config['modules'].get(module.lower(), {})


def _set_nested(d: Dict, keys: list, value: Any) -> None:
    """Set a value in a nested dict, creating intermediate dicts as needed."""
    for key in keys[:-1]:
        d = d.setdefault(key, {})
    d[keys[-1]] = value


def _parse_env_value(value: str) -> Any:
    """Parse environment variable value to appropriate type."""
    lower = value.lower()
    if lower in ('true', '1', 'yes', 'on'):
        return True
    if lower in ('false', '0', 'no', 'off'):
        return False
    for cast in (int, float):
        try:
            return cast(value)
        except ValueError:
            pass
    return value


def _level_from_string(level_str: str) -> LogLevel:
    """Convert string to LogLevel (unknown names fall back to INFO)."""
    mapping = {
        'TRACE': LogLevel.TRACE,
        'DEBUG': LogLevel.DEBUG,
        'INFO': LogLevel.INFO,
        'WARNING': LogLevel.WARNING,
        'WARN': LogLevel.WARNING,
        'ERROR': LogLevel.ERROR,
        'CRITICAL': LogLevel.CRITICAL,
        'OFF': LogLevel.OFF,
    }
    return mapping.get(level_str.strip().upper(), LogLevel.INFO)


def configure_logging(
    level: str = 'INFO',
    modules: Optional[Dict[str, str]] = None,
) -> None:
    """
    Configure the logging system.

    Args:
        level: Default log level for all modules
        modules: Dict of module_name -> level for per-module configuration
    """
    _config['default_level'] = _level_from_string(level)
    if modules:
        for mod, mod_level in modules.items():
            _config['module_levels'][_module_key(mod)] = _level_from_string(mod_level)


def load_env_config(environ: Optional[Dict[str, str]] = None) -> None:
    """Load configuration from environment variables.

    Supports two prefixes:
    - TOUCHSTICK_LOG_*: Log levels (TOUCHSTICK_LOG_ENGINE=DEBUG)
    - TOUCHSTICK_LOGGING_*: Module settings (TOUCHSTICK_LOGGING_STICKS_ENABLED=true)
    """
    env = os.environ if environ is None else environ

    if 'TOUCHSTICK_LOG_LEVEL' in env:
        _config['default_level'] = _level_from_string(env['TOUCHSTICK_LOG_LEVEL'])
    if 'TOUCHSTICK_LOG_DIR' in env:
        _config['log_dir'] = env['TOUCHSTICK_LOG_DIR']

    reserved = ('TOUCHSTICK_LOG_LEVEL', 'TOUCHSTICK_LOG_DIR')
    for key, value in env.items():
        if key.startswith(ENV_MODULE_PREFIX):
            parts = key[len(ENV_MODULE_PREFIX):].lower().split('_')
            if len(parts) >= 2:
                module_settings = _config['modules'].setdefault(parts[0], {})
                _set_nested(module_settings, parts[1:], _parse_env_value(value))
        elif key.startswith(ENV_PREFIX) and key not in reserved:
            _config['module_levels'][key[len(ENV_PREFIX):].lower()] = _level_from_string(value)


# Load env config on import
load_env_config()


def _module_key(module: str) -> str:
    return module.lower().replace('.', '_').replace('/', '_')


def _format_message(module: str, level: str, msg: str) -> str:
    """Format a log message."""
    return f"[{module}] {level}: {msg}"


class TouchstickLogger:
    """
    Logger for a specific module.

    Messages are printed as "[module] LEVEL: message"; %-style args are
    only formatted when the level is enabled.
    """

    def __init__(self, module: str):
        self.module = module
        self._module_key = _module_key(module)

    @property
    def level(self) -> LogLevel:
        """Get effective log level for this module."""
        return _config['module_levels'].get(self._module_key, _config['default_level'])

    def is_enabled_for(self, level: LogLevel) -> bool:
        """Check if messages at the given level would be printed."""
        return level >= self.level

    def _log(self, level: LogLevel, level_name: str, msg: str, *args) -> None:
        if not self.is_enabled_for(level):
            return
        if args:
            try:
                msg = msg % args
            except (TypeError, ValueError):
                msg = f"{msg} {args}"
        print(_format_message(self.module, level_name, msg))

    def trace(self, msg: str, *args) -> None:
        """Log at TRACE level (very verbose)."""
        self._log(LogLevel.TRACE, 'TRACE', msg, *args)

    def debug(self, msg: str, *args) -> None:
        """Log at DEBUG level."""
        self._log(LogLevel.DEBUG, 'DEBUG', msg, *args)

    def info(self, msg: str, *args) -> None:
        """Log at INFO level."""
        self._log(LogLevel.INFO, 'INFO', msg, *args)

    def warning(self, msg: str, *args) -> None:
        """Log at WARNING level."""
        self._log(LogLevel.WARNING, 'WARN', msg, *args)

    def warn(self, msg: str, *args) -> None:
        """Alias for warning()."""
        self.warning(msg, *args)

    def error(self, msg: str, *args) -> None:
        """Log at ERROR level."""
        self._log(LogLevel.ERROR, 'ERROR', msg, *args)

    def critical(self, msg: str, *args) -> None:
        """Log at CRITICAL level."""
        self._log(LogLevel.CRITICAL, 'CRIT', msg, *args)


@lru_cache(maxsize=64)
def get_logger(module: str) -> TouchstickLogger:
    """
    Get a logger for the specified module.

    Loggers are cached, so calling get_logger('engine') multiple times
    returns the same logger instance.
    """
    return TouchstickLogger(module)


def enable_all_logging() -> None:
    """Enable TRACE level for all modules."""
    configure_logging(level='TRACE')
    _config['module_levels'].clear()


def disable_logging() -> None:
    """Disable all logging."""
    _config['default_level'] = LogLevel.OFF
    _config['module_levels'].clear()
