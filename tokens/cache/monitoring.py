"""
Token 快取命中統計

依驗證結果（valid / not_found / used / not_valid）分開計數，
由 /health/cache 在 web 行程內回報。
"""

import threading
from collections import Counter
from typing import Dict


class TokenCacheStats:

    def __init__(self):
        self._hits = Counter()
        self._misses = Counter()
        self._lock = threading.Lock()

    def record(self, hit: bool, reason: str):
        with self._lock:
            (self._hits if hit else self._misses)[reason] += 1

    def snapshot(self) -> Dict:
        """
        Returns:
            {'hits', 'misses', 'hitRate', 'byReason': {reason: {'hits', 'misses'}}}
        """
        with self._lock:
            hits = dict(self._hits)
            misses = dict(self._misses)

        total_hits = sum(hits.values())
        total = total_hits + sum(misses.values())
        return {
            'hits': total_hits,
            'misses': total - total_hits,
            'hitRate': round(total_hits / total, 4) if total else 0.0,
            'byReason': {
                reason: {'hits': hits.get(reason, 0), 'misses': misses.get(reason, 0)}
                for reason in sorted(set(hits) | set(misses))
            },
        }

    def reset(self):
        with self._lock:
            self._hits.clear()
            self._misses.clear()


token_cache_stats = TokenCacheStats()
