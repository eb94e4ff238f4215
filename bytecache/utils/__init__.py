"""bytecache utility modules."""

from .logging import (
    get_logger,
    get_adapter,
    initialize_logging,
    shutdown_logging,
    CacheEventLogger,
)
from .logging_config import (
    LoggingPresets,
    configure_from_environment,
    get_logging_config
)
from .validation import validate_key, validate_max_bytes, validate_size, measure_value

__all__ = [
    # Logging functions
    "get_logger",
    "get_adapter",
    "initialize_logging",
    "shutdown_logging",
    "CacheEventLogger",
    # Logging configuration
    "LoggingPresets",
    "configure_from_environment",
    "get_logging_config",
    # Validation
    "validate_key",
    "validate_max_bytes",
    "validate_size",
    "measure_value",
]
