"""
帶背景清理的 LocMemCache

Django 的 LocMemCache 只在讀到過期項目時才移除它。這裡加上一條 daemon 執行緒，
每 CLEANUP_INTERVAL 秒清掉過期的 Token 驗證結果；寫滿時也先清過期，
仍然滿才依最久未使用的順序淘汰 1/CULL_FREQUENCY。

設定方式（settings.CACHES）：
    'tokens': {
        'BACKEND': 'tokens.cache.backends.SweepingLocMemCache',
        'LOCATION': 'contest-tokens',
        'OPTIONS': {'MAX_ENTRIES': 1000, 'CULL_FREQUENCY': 10, 'CLEANUP_INTERVAL': 60},
    }
"""

import logging
import math
import threading
from typing import Dict

from django.core.cache.backends.locmem import LocMemCache

logger = logging.getLogger(__name__)

# LOCATION -> 清理執行緒；同一個 LOCATION 的實例共用資料，只需要一條
_sweepers: Dict[str, "CacheSweeper"] = {}
_sweepers_lock = threading.Lock()


class SweepingLocMemCache(LocMemCache):

    def __init__(self, name, params):
        super().__init__(name, params)
        self.location = name
        self.cleanup_interval = params.get('OPTIONS', {}).get('CLEANUP_INTERVAL', 60)
        if self.cleanup_interval > 0:
            start_sweeper(self)

    def purge_expired(self) -> int:
        """移除所有過期項目，回傳移除數量"""
        with self._lock:
            removed = self._purge_expired()
        if removed:
            logger.debug(f"Cache {self.location} cleanup removed {removed} expired entries")
        return removed

    def size(self) -> int:
        with self._lock:
            return len(self._cache)

    def _purge_expired(self):
        # 呼叫端需持有 self._lock
        expired = [key for key in list(self._expire_info) if self._has_expired(key)]
        for key in expired:
            self._delete(key)
        return len(expired)

    def _cull(self):
        if self._purge_expired() and len(self._cache) < self._max_entries:
            return
        if self._cull_frequency == 0:
            self._cache.clear()
            self._expire_info.clear()
            return
        # _cache 最前面是最近使用的，popitem() 取出最久未使用的
        count = min(math.ceil(self._max_entries / self._cull_frequency), len(self._cache))
        for _ in range(count):
            key, _ = self._cache.popitem()
            del self._expire_info[key]
        logger.debug(f"Cache {self.location} full, evicted {count} least recently used entries")


class CacheSweeper:
    """定期呼叫 cache.purge_expired() 的背景執行緒"""

    def __init__(self, cache: SweepingLocMemCache, interval: float):
        self.cache = cache
        self.interval = interval
        self._stop_event = threading.Event()
        self._thread = threading.Thread(
            target=self._run, name=f"cache-sweeper-{cache.location}", daemon=True
        )

    def start(self):
        self._thread.start()

    def stop(self):
        self._stop_event.set()
        self._thread.join(timeout=1)

    def is_alive(self) -> bool:
        return self._thread.is_alive()

    def _run(self):
        while not self._stop_event.wait(self.interval):
            try:
                self.cache.purge_expired()
            except Exception as e:
                logger.error(f"Cache {self.cache.location} cleanup failed: {e}")


def start_sweeper(cache: SweepingLocMemCache) -> CacheSweeper:
    with _sweepers_lock:
        sweeper = _sweepers.get(cache.location)
        if sweeper is None:
            sweeper = CacheSweeper(cache, cache.cleanup_interval)
            sweeper.start()
            _sweepers[cache.location] = sweeper
        return sweeper


def stop_sweeper(location: str):
    with _sweepers_lock:
        sweeper = _sweepers.pop(location, None)
    if sweeper is not None:
        sweeper.stop()
