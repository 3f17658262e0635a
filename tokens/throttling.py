import logging

from rest_framework import status
from rest_framework.exceptions import Throttled
from rest_framework.throttling import BaseThrottle

from .ratelimit import get_client_ip, get_rate_limiter

logger = logging.getLogger(__name__)

RATE_LIMIT_MESSAGE = "Rate limit exceeded. Please try again later."


class RateLimitExceeded(Throttled):
    """帶有限制器結果的 429，供 exception handler 填入 X-RateLimit-* 標頭"""

    status_code = status.HTTP_429_TOO_MANY_REQUESTS
    default_detail = RATE_LIMIT_MESSAGE

    def __init__(self, result, wait):
        super().__init__(wait=wait, detail=RATE_LIMIT_MESSAGE)
        self.result = result

    def rate_limit_headers(self):
        return {
            'X-RateLimit-Limit': str(self.result.limit),
            'X-RateLimit-Remaining': str(self.result.remaining),
            'X-RateLimit-Reset': str(int(self.result.reset)),
            'Retry-After': str(self.wait),
        }


class ContestRateThrottle(BaseThrottle):
    """
    依 view 的 throttle_scope 取得對應的 RateLimiter。
    限制器本身出錯時放行請求，只記錄日誌。
    """

    def __init__(self):
        self.result = None
        self.limiter = None

    def allow_request(self, request, view):
        scope = getattr(view, 'throttle_scope', None)
        if scope is None:
            return True

        ident = get_client_ip(request)
        try:
            self.limiter = get_rate_limiter(scope)
            self.result = self.limiter.check(ident)
        except Exception as e:
            logger.error(f"Rate limit error: {e}")
            return True

        if not self.result.success:
            logger.warning(f"Rate limit exceeded for {ident} on {scope}")
        return self.result.success

    def wait(self):
        if self.result is None or self.limiter is None:
            return None
        return self.limiter.retry_after(self.result)


class RateLimitedViewMixin:
    """
    APIView mixin：超過限制時拋出 RateLimitExceeded（而非預設的 Throttled）
    """

    throttle_classes = [ContestRateThrottle]
    throttle_scope = None

    def check_throttles(self, request):
        for throttle in self.get_throttles():
            if not throttle.allow_request(request, self):
                raise RateLimitExceeded(throttle.result, throttle.wait())
