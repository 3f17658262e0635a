# tokens/tests/test_models.py
"""
測試 Token 模型、快取失效 signal 與後台動作
"""
from unittest import mock

from django.contrib.admin.sites import AdminSite
from django.db import IntegrityError
from django.test import RequestFactory, TestCase

from tokens.admin import TokenAdmin
from tokens.cache import CacheKeys, get_token_cache
from tokens.models import Token
from tokens.services import MESSAGE_NOT_VALID, validate_token


class TokenModelTest(TestCase):
    """測試 Token 模型"""

    def test_defaults(self):
        """測試預設值"""
        token = Token.objects.create(token_code='ABC123')
        self.assertTrue(token.is_valid)
        self.assertFalse(token.is_used)
        self.assertIsNone(token.used_at)
        self.assertIsNotNone(token.created_at)
        self.assertTrue(token.is_redeemable)
        self.assertEqual(str(token), 'ABC123')

    def test_token_code_unique(self):
        """測試代碼唯一"""
        Token.objects.create(token_code='ABC123')
        with self.assertRaises(IntegrityError):
            Token.objects.create(token_code='ABC123')

    def test_not_redeemable(self):
        """測試已使用或無效的 Token"""
        self.assertFalse(Token(token_code='A', is_used=True).is_redeemable)
        self.assertFalse(Token(token_code='B', is_valid=False).is_redeemable)

    def test_table_name(self):
        self.assertEqual(Token._meta.db_table, 'Token')


class TokenCacheSignalTest(TestCase):
    """測試 Token 變更時清除快取"""

    def test_create_does_not_touch_cache(self):
        """測試新建立的 Token 不清除快取（不存在的結果在 TTL 內維持）"""
        validate_token('ABC123')
        Token.objects.create(token_code='ABC123')
        self.assertIsNotNone(get_token_cache().get_safe(CacheKeys.token('ABC123')))

    def test_update_clears_cache(self):
        """測試修改後清除快取"""
        token = Token.objects.create(token_code='ABC123')
        validate_token('ABC123')
        token.is_valid = False
        token.save(update_fields=['is_valid', 'updated_at'])
        self.assertIsNone(get_token_cache().get_safe(CacheKeys.token('ABC123')))


class TokenAdminTest(TestCase):
    """測試後台批次動作"""

    def setUp(self):
        self.admin = TokenAdmin(Token, AdminSite())
        self.request = RequestFactory().post('/admin/tokens/token/')
        self.token = Token.objects.create(token_code='ABC123')

    def test_invalidate_clears_cache(self):
        """測試標記無效後立即生效"""
        self.assertTrue(validate_token('ABC123').valid)

        with mock.patch('tokens.admin.messages') as messages:
            self.admin.invalidate_tokens(self.request, Token.objects.filter(pk=self.token.pk))

        messages.success.assert_called_once()
        self.token.refresh_from_db()
        self.assertFalse(self.token.is_valid)
        self.assertEqual(validate_token('ABC123').message, MESSAGE_NOT_VALID)

    def test_revalidate(self):
        """測試重新標記有效"""
        Token.objects.filter(pk=self.token.pk).update(is_valid=False)
        with mock.patch('tokens.admin.messages'):
            self.admin.revalidate_tokens(self.request, Token.objects.filter(pk=self.token.pk))
        self.assertTrue(validate_token('ABC123').valid)

    def test_delete_not_allowed(self):
        """測試後台不能刪除 Token"""
        self.assertFalse(self.admin.has_delete_permission(self.request))

    def test_redeemable_column(self):
        """測試列表顯示是否可使用"""
        self.assertTrue(self.admin.display_is_redeemable(self.token))
        self.token.is_used = True
        self.assertFalse(self.admin.display_is_redeemable(self.token))
