"""
快取失效 Signal Handlers

Token 在資料庫被修改後（例如後台停用），清除對應的驗證結果快取
"""

import logging

from django.db.models.signals import post_save
from django.dispatch import receiver

from tokens.models import Token
from tokens.cache import CacheKeys, get_token_cache

logger = logging.getLogger(__name__)


@receiver(post_save, sender=Token)
def on_token_saved(sender, instance, created, **kwargs):
    if created:
        return

    cache_key = CacheKeys.token(instance.token_code)
    get_token_cache().delete_safe(cache_key)
    logger.debug(f"Cleared token cache for {instance.token_code}")
