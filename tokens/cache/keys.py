"""
快取鍵管理模組

統一管理所有快取鍵的生成，確保命名一致性
"""


class CacheKeys:
    """快取鍵生成器"""

    PREFIX_TOKEN = "TOKEN"

    @staticmethod
    def token(token_code: str) -> str:
        """
        Token 驗證結果快取鍵

        Args:
            token_code: 使用者輸入的 Token 代碼

        Returns:
            快取鍵字符串
        """
        return f"{CacheKeys.PREFIX_TOKEN}:{token_code}"
