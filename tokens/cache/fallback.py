"""
快取降級機制模組

快取任何操作失敗時只記錄日誌，請求照常走資料庫
"""

import logging
from typing import Any, Optional

from django.core.cache import caches

logger = logging.getLogger(__name__)


class CacheWithFallback:
    """
    帶降級機制的快取操作

    快取故障時回傳 None / False，不阻塞主流程
    """

    def __init__(self, alias: str = 'tokens'):
        """
        Args:
            alias: settings.CACHES 中的快取名稱
        """
        self.alias = alias

    @property
    def backend(self):
        return caches[self.alias]

    def get_safe(self, key: str) -> Optional[Any]:
        """安全獲取快取，失敗視同 miss"""
        try:
            return self.backend.get(key)
        except Exception as e:
            logger.error(f"Cache get failed for {key}: {e}, falling back to database")
            return None

    def set_safe(self, key: str, value: Any, timeout: int = 60) -> bool:
        """
        安全寫入快取，失敗不阻塞主流程

        Returns:
            True/False 表示是否成功
        """
        try:
            self.backend.set(key, value, timeout)
            return True
        except Exception as e:
            logger.error(f"Cache set failed for {key}: {e}")
            return False

    def add_safe(self, key: str, value: Any, timeout: int = 60) -> bool:
        """
        只在鍵不存在（或已過期）時寫入

        Returns:
            True 表示已寫入；鍵已存在或快取故障時 False
        """
        try:
            return self.backend.add(key, value, timeout)
        except Exception as e:
            logger.error(f"Cache add failed for {key}: {e}")
            return False

    def delete_safe(self, key: str) -> bool:
        try:
            self.backend.delete(key)
            return True
        except Exception as e:
            logger.error(f"Cache delete failed for {key}: {e}")
            return False

    def clear_safe(self) -> bool:
        try:
            self.backend.clear()
            return True
        except Exception as e:
            logger.error(f"Cache clear failed: {e}")
            return False
