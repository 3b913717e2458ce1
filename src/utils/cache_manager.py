"""
Cache Manager Utility
====================

In-memory response cache shared by the weather provider adapters.

Entries expire after their TTL (0 means never) and the least recently used
entry is dropped once max_size is reached. A daemon thread sweeps expired
entries every cleanup_interval seconds; it can be disabled for short-lived
caches and tests.

Classes:
    CacheManager: Thread-safe TTL/LRU cache
    CacheEntry: Stored value with its expiry deadline
    CacheStats: Hit/miss/eviction counters

Author: Weather Disruption Engine Team
"""

import logging
import threading
import time
from collections import OrderedDict
from dataclasses import dataclass, asdict
from typing import Any, Callable, Dict, Optional

from config import config


@dataclass
class CacheEntry:
    value: Any
    expires_at: Optional[float]
    hits: int = 0

    def expired(self, now: float) -> bool:
        return self.expires_at is not None and now >= self.expires_at


@dataclass
class CacheStats:
    hits: int = 0
    misses: int = 0
    sets: int = 0
    evictions: int = 0
    expired: int = 0
    size: int = 0
    max_size: int = 0

    @property
    def hit_rate(self) -> float:
        lookups = self.hits + self.misses
        return self.hits / lookups if lookups else 0.0

    def to_dict(self) -> Dict:
        data = asdict(self)
        data["hit_rate"] = round(self.hit_rate, 3)
        return data


class CacheManager:
    """
    Thread-safe TTL cache with LRU eviction
    """

    def __init__(self, max_size: int = None, default_ttl: int = None,
                 cleanup_interval: float = None, enable_cleanup_thread: bool = True,
                 time_source: Callable[[], float] = time.monotonic):
        """
        Initialize Cache Manager

        Args:
            max_size (int): Maximum number of entries (default from config)
            default_ttl (int): TTL in seconds when set() gets none; 0 disables expiry
            cleanup_interval (float): Seconds between background sweeps
            enable_cleanup_thread (bool): Whether to start the background sweeper
            time_source (Callable): Monotonic clock used for expiry
        """
        self.logger = logging.getLogger(__name__)
        self.max_size = max_size or config.CACHE_MAX_SIZE
        self.default_ttl = default_ttl if default_ttl is not None else config.CACHE_TTL
        self.cleanup_interval = cleanup_interval or config.CACHE_CLEANUP_INTERVAL
        self._now = time_source

        self._entries: "OrderedDict[str, CacheEntry]" = OrderedDict()
        self._lock = threading.RLock()
        self.stats = CacheStats(max_size=self.max_size)

        self._stop_cleanup = threading.Event()
        self._cleanup_thread: Optional[threading.Thread] = None
        if enable_cleanup_thread:
            self._cleanup_thread = threading.Thread(
                target=self._cleanup_loop, name="cache-cleanup", daemon=True
            )
            self._cleanup_thread.start()

        self.logger.debug(f"Cache Manager ready (max_size={self.max_size}, ttl={self.default_ttl}s)")

    def get(self, key: str) -> Optional[Any]:
        """Cached value for key, None on miss or expiry"""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                self.stats.misses += 1
                return None

            if entry.expired(self._now()):
                del self._entries[key]
                self.stats.expired += 1
                self.stats.misses += 1
                return None

            entry.hits += 1
            self._entries.move_to_end(key)
            self.stats.hits += 1
            return entry.value

    def set(self, key: str, value: Any, ttl: int = None) -> None:
        """Store value under key for ttl seconds (default_ttl if omitted, 0 = no expiry)"""
        ttl = self.default_ttl if ttl is None else ttl
        expires_at = self._now() + ttl if ttl > 0 else None

        with self._lock:
            self._entries[key] = CacheEntry(value=value, expires_at=expires_at)
            self._entries.move_to_end(key)
            self.stats.sets += 1

            while len(self._entries) > self.max_size:
                evicted, _ = self._entries.popitem(last=False)
                self.stats.evictions += 1
                self.logger.debug(f"Evicted LRU entry: {evicted}")

    def delete(self, key: str) -> bool:
        with self._lock:
            return self._entries.pop(key, None) is not None

    def has_key(self, key: str) -> bool:
        """Whether key holds an unexpired value; does not count as a hit"""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return False
            if entry.expired(self._now()):
                del self._entries[key]
                self.stats.expired += 1
                return False
            return True

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self.stats = CacheStats(max_size=self.max_size)

    def cleanup_expired(self) -> int:
        """Drop every expired entry; returns how many were removed"""
        with self._lock:
            now = self._now()
            stale = [key for key, entry in self._entries.items() if entry.expired(now)]
            for key in stale:
                del self._entries[key]
            self.stats.expired += len(stale)

        if stale:
            self.logger.debug(f"Removed {len(stale)} expired cache entries")
        return len(stale)

    def get_stats(self) -> CacheStats:
        with self._lock:
            self.stats.size = len(self._entries)
            return self.stats

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def _cleanup_loop(self) -> None:
        while not self._stop_cleanup.wait(self.cleanup_interval):
            try:
                self.cleanup_expired()
            except Exception as e:
                self.logger.error(f"Error in cache cleanup thread: {e}")

    def shutdown(self) -> None:
        """Stop the cleanup thread"""
        self._stop_cleanup.set()
        if self._cleanup_thread is not None and self._cleanup_thread.is_alive():
            self._cleanup_thread.join(timeout=5)
        self.logger.debug("Cache Manager shut down")
