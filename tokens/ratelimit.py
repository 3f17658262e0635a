"""
行程內速率限制

固定時間窗計數：識別碼第一次請求時開一個 interval 秒的窗，
窗結束後重新計數。狀態只存在記憶體，重啟即歸零，多個行程之間不共享。
"""

import logging
import math
import threading
import time
from collections import OrderedDict
from typing import Callable, Dict, NamedTuple

from django.conf import settings

logger = logging.getLogger(__name__)


class RateLimitResult(NamedTuple):
    success: bool
    limit: int
    remaining: int
    reset: float  # 時間窗結束的 epoch 秒數


class RateLimiter:
    """固定時間窗的速率限制器"""

    def __init__(
        self,
        limit: int,
        interval: float,
        max_tracked: int = 500,
        clock: Callable[[], float] = time.time,
    ):
        """
        Args:
            limit: 每個時間窗允許的請求數
            interval: 時間窗長度（秒）
            max_tracked: 最多追蹤的識別碼數量
            clock: 時間來源（epoch 秒），測試時可替換
        """
        self.limit = limit
        self.interval = interval
        self.max_tracked = max_tracked
        self._clock = clock
        # identifier -> [count, reset_time]，依時間窗開始的先後排列
        self._windows: "OrderedDict[str, list]" = OrderedDict()
        self._lock = threading.Lock()
        self._next_prune = clock() + interval

    def check(self, identifier: str) -> RateLimitResult:
        """
        檢查並記錄一次請求

        Returns:
            RateLimitResult，success=False 時本次請求不計數
        """
        now = self._clock()
        with self._lock:
            if now >= self._next_prune:
                self._prune_expired(now)
                self._next_prune = now + self.interval

            window = self._windows.get(identifier)
            if window is None or window[1] <= now:
                if identifier not in self._windows and len(self._windows) >= self.max_tracked:
                    self._shrink(now)
                window = [0, now + self.interval]
                self._windows[identifier] = window
                self._windows.move_to_end(identifier)

            count, reset = window
            if count >= self.limit:
                return RateLimitResult(False, self.limit, 0, reset)

            window[0] = count + 1
            return RateLimitResult(True, self.limit, self.limit - window[0], reset)

    def retry_after(self, result: RateLimitResult) -> int:
        """距離時間窗結束的秒數（至少 1）"""
        return max(1, math.ceil(result.reset - self._clock()))

    def prune(self) -> int:
        with self._lock:
            return self._prune_expired(self._clock())

    def reset(self):
        with self._lock:
            self._windows.clear()

    def __len__(self) -> int:
        return len(self._windows)

    def _prune_expired(self, now):
        expired = [key for key, (_, reset) in self._windows.items() if reset <= now]
        for key in expired:
            del self._windows[key]
        return len(expired)

    def _shrink(self, now):
        """超過追蹤上限：先清過期，再丟掉最舊的時間窗直到騰出四分之一容量"""
        self._prune_expired(now)
        target = self.max_tracked - max(1, self.max_tracked // 4)
        dropped = 0
        while len(self._windows) > target:
            self._windows.popitem(last=False)
            dropped += 1
        if dropped:
            logger.warning(f"Rate limiter tracking too many clients, dropped {dropped} oldest windows")


_limiters: Dict[str, RateLimiter] = {}
_limiters_lock = threading.Lock()


def get_rate_limiter(scope: str) -> RateLimiter:
    """
    依 settings.CONTEST_RATE_LIMITS 取得某個範圍的限制器，同一範圍共用一個實例

    Raises:
        KeyError: 未設定的範圍
    """
    limiter = _limiters.get(scope)
    if limiter is None:
        with _limiters_lock:
            limiter = _limiters.get(scope)
            if limiter is None:
                limit, interval = settings.CONTEST_RATE_LIMITS[scope]
                limiter = RateLimiter(
                    limit=limit,
                    interval=interval,
                    max_tracked=getattr(settings, 'CONTEST_RATE_LIMIT_MAX_TRACKED', 500),
                )
                _limiters[scope] = limiter
    return limiter


def reset_rate_limiters():
    """丟棄所有限制器（設定變更或測試時使用）"""
    with _limiters_lock:
        _limiters.clear()


def get_client_ip(request) -> str:
    """獲取客戶端 IP"""
    x_forwarded_for = request.META.get('HTTP_X_FORWARDED_FOR')
    if x_forwarded_for:
        ip = x_forwarded_for.split(',')[0].strip()
        if ip:
            return ip
    x_real_ip = request.META.get('HTTP_X_REAL_IP')
    if x_real_ip:
        return x_real_ip.strip()
    return request.META.get('REMOTE_ADDR') or 'unknown-ip'
