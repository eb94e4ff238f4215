"""
Structured logging for bytecache.

The cache engine itself only emits DEBUG records through module loggers. This
module lets the embedding application route those records somewhere useful:
JSON or text formatting, console output and an optional rotating log file.
"""
import json
import logging
import logging.handlers
import sys
import threading
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

PACKAGE_LOGGER = "bytecache"

# LogRecord attributes that are never copied into the JSON payload
_RESERVED_ATTRS = frozenset([
    'name', 'msg', 'args', 'levelname', 'levelno',
    'pathname', 'filename', 'module', 'lineno',
    'funcName', 'created', 'msecs', 'relativeCreated',
    'thread', 'threadName', 'processName', 'process',
    'taskName', 'getMessage', 'exc_info', 'exc_text', 'stack_info',
    'extra_fields', 'message', 'asctime',
])


class StructuredFormatter(logging.Formatter):
    """
    JSON formatter producing one object per line.

    Every entry carries timestamp, level, logger, message, module, function and
    line. Fields passed via ``extra_fields`` or plain ``extra`` are merged in.
    """

    def format(self, record: logging.LogRecord) -> str:
        """
        Format log record as structured JSON.

        Args:
            record: Log record to format

        Returns:
            JSON formatted log string
        """
        log_entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat() + "Z",
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_entry["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
                "traceback": self.formatException(record.exc_info)
            }

        if hasattr(record, 'extra_fields'):
            log_entry.update(record.extra_fields)

        for key, value in record.__dict__.items():
            if key.startswith('_') or key in _RESERVED_ATTRS:
                continue
            if isinstance(value, (str, int, float, bool, list, dict, type(None))):
                log_entry[key] = value

        return json.dumps(log_entry, ensure_ascii=False, default=str)


class ByteCacheLoggerAdapter(logging.LoggerAdapter):
    """Logger adapter that attaches a fixed set of structured fields."""

    def __init__(self, logger, extra_fields=None):
        super().__init__(logger, {})
        self.extra_fields = extra_fields or {}

    def process(self, msg, kwargs):
        if self.extra_fields:
            kwargs.setdefault('extra', {})['extra_fields'] = self.extra_fields
        return msg, kwargs

    def bind(self, **kwargs):
        """Create a new adapter with additional context."""
        return ByteCacheLoggerAdapter(self.logger, {**self.extra_fields, **kwargs})


class CacheEventLogger:
    """
    Emits structured DEBUG records for cache events.

    Args:
        logger: Logger the events are written to
        cache_name: Name identifying the cache instance in log records
    """

    def __init__(self, logger: logging.Logger, cache_name: str = "default"):
        self.logger = logger
        self.cache_name = cache_name

    @property
    def enabled(self) -> bool:
        return self.logger.isEnabledFor(logging.DEBUG)

    def _emit(self, message: str, event_type: str, key: str, **kwargs):
        self.logger.debug(
            message,
            extra={
                'extra_fields': {
                    'event_type': event_type,
                    'cache_name': self.cache_name,
                    'cache_key': key,
                    **kwargs
                }
            }
        )

    def log_cache_hit(self, key: str, **kwargs):
        self._emit("Cache hit", 'cache_hit', key, **kwargs)

    def log_cache_miss(self, key: str, **kwargs):
        self._emit("Cache miss", 'cache_miss', key, **kwargs)

    def log_eviction(self, key: str, entry_bytes: int, **kwargs):
        """
        Log the removal of an entry.

        Args:
            key: Evicted key
            entry_bytes: Bytes released by the eviction (key plus value)
            **kwargs: Additional metadata
        """
        self._emit("Cache eviction", 'cache_eviction', key, entry_bytes=entry_bytes, **kwargs)


class ThreadSafeLogManager:
    """
    Thread-safe owner of the handlers attached to the ``bytecache`` logger.

    Only the package logger is configured; the application's root logger is
    left alone.
    """

    def __init__(self,
                 log_level: str = "INFO",
                 log_format: str = "json",
                 log_file: Optional[str] = None,
                 max_bytes: int = 10 * 1024 * 1024,  # 10MB
                 backup_count: int = 5):
        """
        Initialize the log manager.

        Args:
            log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            log_format: Log format ('json' or 'text')
            log_file: Path to log file (optional)
            max_bytes: Maximum size of log file before rotation
            backup_count: Number of backup files to keep
        """
        self.log_level = getattr(logging, log_level.upper())
        self.log_format = log_format
        self.log_file = log_file
        self.max_bytes = max_bytes
        self.backup_count = backup_count

        self._lock = threading.RLock()
        self._initialized = False
        self._handlers = []

        self._safe_initialize()
        self.logger = logging.getLogger(PACKAGE_LOGGER)

    def _safe_initialize(self):
        with self._lock:
            if not self._initialized:
                try:
                    self._configure_package_logger()
                except OSError as e:
                    logging.getLogger(PACKAGE_LOGGER).error(f"Failed to configure file logging: {e}")
                self._initialized = True

    def _build_formatter(self) -> logging.Formatter:
        if self.log_format == "json":
            return StructuredFormatter()
        return logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')

    def _configure_package_logger(self):
        package_logger = logging.getLogger(PACKAGE_LOGGER)
        package_logger.setLevel(self.log_level)
        formatter = self._build_formatter()

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(self.log_level)
        console_handler.setFormatter(formatter)
        package_logger.addHandler(console_handler)
        self._handlers.append(console_handler)

        if self.log_file:
            log_path = Path(self.log_file)
            log_path.parent.mkdir(parents=True, exist_ok=True)

            file_handler = logging.handlers.RotatingFileHandler(
                self.log_file,
                maxBytes=self.max_bytes,
                backupCount=self.backup_count
            )
            file_handler.setLevel(self.log_level)
            file_handler.setFormatter(formatter)
            package_logger.addHandler(file_handler)
            self._handlers.append(file_handler)

    def get_logger(self, name: str) -> logging.Logger:
        """
        Get a logger under the package namespace.

        Args:
            name: Logger name; prefixed with ``bytecache.`` when outside it

        Returns:
            Logger instance
        """
        return get_logger(name)

    def get_adapter(self, name: str, **extra_fields) -> ByteCacheLoggerAdapter:
        return get_adapter(name, **extra_fields)

    def shutdown(self):
        """Detach and close every handler this manager installed."""
        with self._lock:
            package_logger = logging.getLogger(PACKAGE_LOGGER)
            for handler in self._handlers:
                package_logger.removeHandler(handler)
                handler.close()
            self._handlers.clear()
            package_logger.setLevel(logging.NOTSET)
            self._initialized = False


_log_manager: Optional[ThreadSafeLogManager] = None
_log_manager_lock = threading.RLock()


def initialize_logging(
    log_level: str = "INFO",
    log_format: str = "json",
    log_file: Optional[str] = None,
    max_bytes: int = 10 * 1024 * 1024,
    backup_count: int = 5
) -> ThreadSafeLogManager:
    """
    Initialize package logging once; later calls return the existing manager.

    Args:
        log_level: Logging level
        log_format: Log format ('json' or 'text')
        log_file: Path to log file
        max_bytes: Maximum size of log file before rotation
        backup_count: Number of backup files to keep

    Returns:
        Configured log manager instance
    """
    global _log_manager

    with _log_manager_lock:
        if _log_manager is None:
            _log_manager = ThreadSafeLogManager(
                log_level=log_level,
                log_format=log_format,
                log_file=log_file,
                max_bytes=max_bytes,
                backup_count=backup_count
            )

    return _log_manager


def shutdown_logging():
    """Remove the handlers installed by ``initialize_logging``."""
    global _log_manager

    with _log_manager_lock:
        if _log_manager is not None:
            _log_manager.shutdown()
            _log_manager = None


def get_log_manager() -> Optional[ThreadSafeLogManager]:
    with _log_manager_lock:
        return _log_manager


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger under the ``bytecache`` namespace.

    Unlike ``initialize_logging`` this never installs handlers, so library code
    can call it freely.
    """
    if name != PACKAGE_LOGGER and not name.startswith(PACKAGE_LOGGER + "."):
        name = f"{PACKAGE_LOGGER}.{name}"
    return logging.getLogger(name)


def get_adapter(name: str, **extra_fields) -> ByteCacheLoggerAdapter:
    """
    Get a logger adapter that adds ``extra_fields`` to every record.

    Args:
        name: Logger name
        **extra_fields: Additional fields to include in all log messages
    """
    return ByteCacheLoggerAdapter(get_logger(name), extra_fields)
