"""
Thread-safe rate-limited logging utilities.

Used by the outcome poll loop so a gateway that keeps failing does not
produce one warning per tick.
"""
import logging
import threading
from typing import Dict, Optional

from cachetools import TTLCache

logger = logging.getLogger(__name__)

_DEFAULT_INTERVAL = 60
_CACHE_MAXSIZE = 100

# One cache per interval so callers with different intervals do not evict each other
_error_log_caches: Dict[int, TTLCache] = {}
_error_log_cache_lock = threading.RLock()


def rate_limited_log(
    message: str,
    level: str = "warning",
    interval: int = _DEFAULT_INTERVAL,
    logger_instance: Optional[logging.Logger] = None
) -> bool:
    """
    Log a message at most once per interval, in a thread-safe manner.

    Args:
        message: Message to log
        level: Log level (debug, info, warning, error, critical)
        interval: Minimum interval between identical logs in seconds
        logger_instance: Logger to use (defaults to module logger)

    Returns:
        True if the message was emitted, False if it was suppressed
    """
    log_instance = logger_instance or logger
    log_method = getattr(log_instance, level.lower(), log_instance.warning)
    key = f"{level}:{message}"

    with _error_log_cache_lock:
        cache = _error_log_caches.get(interval)
        if cache is None:
            cache = _error_log_caches[interval] = TTLCache(maxsize=_CACHE_MAXSIZE, ttl=interval)
        if key in cache:
            return False
        log_method(message)
        cache[key] = True
        return True


def reset_rate_limited_log() -> None:
    """Forget every message logged so far."""
    with _error_log_cache_lock:
        _error_log_caches.clear()
