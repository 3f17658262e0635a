"""
Token Cache Module

Token 驗證結果的行程內快取（settings.CACHES['tokens']），包括：
- 快取鍵管理
- 帶背景清理的 LocMemCache
- 降級機制（快取錯誤不影響請求）
- 命中統計
"""

from .keys import CacheKeys
from .fallback import CacheWithFallback
from .monitoring import TokenCacheStats, token_cache_stats

__all__ = [
    'CacheKeys',
    'CacheWithFallback',
    'TokenCacheStats',
    'token_cache_stats',
    'get_token_cache',
    'reset_token_cache',
]

token_cache = CacheWithFallback('tokens')


def get_token_cache() -> CacheWithFallback:
    return token_cache


def reset_token_cache():
    """清空 Token 快取"""
    token_cache.clear_safe()
