from django.db import models
import uuid


class Token(models.Model):
    """
    單次使用的參賽 Token。
    由 seed_tokens 建立，送出答案時在交易內由「可用」轉為「已使用」，程式不會刪除。
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    token_code = models.CharField(max_length=64, unique=True, verbose_name='Token 代碼')

    is_valid = models.BooleanField(default=True, verbose_name='是否有效')

    is_used = models.BooleanField(default=False, verbose_name='是否已使用')

    used_at = models.DateTimeField(null=True, blank=True, verbose_name='使用時間')

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'Token'
        verbose_name = 'Token'
        verbose_name_plural = 'Tokens'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['is_used'], name='Token_is_used_idx'),
            models.Index(fields=['is_valid', 'is_used'], name='Token_is_valid_is_used_idx'),
            models.Index(fields=['token_code', 'is_used', 'is_valid'], name='Token_code_used_valid_idx'),
        ]

    def __str__(self):
        return self.token_code

    @property
    def is_redeemable(self):
        """有效且尚未使用"""
        return self.is_valid and not self.is_used
