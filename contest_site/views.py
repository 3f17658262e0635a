import logging

from django.db import DatabaseError, connection
from django.http import JsonResponse

from tokens.cache import get_token_cache, token_cache_stats

logger = logging.getLogger(__name__)


def health_root(request):
    return JsonResponse({"status": "ok"})


def health_db(request):
    """資料庫連線檢查"""
    try:
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")
            cursor.fetchone()
    except DatabaseError as e:
        logger.error(f"Database health check failed: {e}")
        return JsonResponse({"db": "unavailable"}, status=503)
    return JsonResponse({"db": "ok"})


def health_cache(request):
    """本行程 Token 快取的項目數與命中統計"""
    cache = get_token_cache()
    try:
        entries = cache.backend.size()
    except Exception as e:
        logger.error(f"Token cache size check failed: {e}")
        entries = None
    return JsonResponse({"entries": entries, **token_cache_stats.snapshot()})
