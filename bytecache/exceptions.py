class ByteCacheError(Exception):
    """Base class for all bytecache exceptions."""
    pass

class ConfigurationError(ByteCacheError):
    """Raised when cache settings cannot be validated."""
    def __init__(self, message: str, original_exception: Exception = None):
        super().__init__(message)
        self.original_exception = original_exception
        self.message = message

    def __str__(self) -> str:
        if self.original_exception:
            return f"{self.message} (Original: {str(self.original_exception)})"
        return self.message

class ValidationError(ByteCacheError, ValueError):
    """Raised when a key, value or size argument breaks the cache contract."""
    pass

class CacheOperationError(ByteCacheError):
    """Raised when a cache operation is invoked in a state that forbids it."""
    pass

class ReentrantCallError(CacheOperationError):
    """Raised when an eviction callback tries to mutate the cache that invoked it."""
    pass
