from django.contrib import admin, messages
from unfold.admin import ModelAdmin
from unfold.decorators import action, display

from .models import Token
from .cache import CacheKeys, get_token_cache


@admin.register(Token)
class TokenAdmin(ModelAdmin):
    list_display = ('token_code', 'display_is_valid', 'display_is_used', 'display_is_redeemable', 'used_at', 'created_at')
    list_filter = ('is_valid', 'is_used')
    search_fields = ('token_code',)
    ordering = ('-created_at',)
    list_per_page = 50
    readonly_fields = ('id', 'is_used', 'used_at', 'created_at', 'updated_at')
    actions = ['invalidate_tokens', 'revalidate_tokens']

    fieldsets = (
        ("Token 資訊", {
            "fields": ("id", "token_code", "is_valid"),
        }),
        ("使用狀態", {
            "fields": ("is_used", "used_at"),
        }),
        ("時間戳記", {
            "fields": ("created_at", "updated_at"),
            "classes": ["collapse"],
        }),
    )

    @display(description="有效", label=True)
    def display_is_valid(self, instance):
        return instance.is_valid

    @display(description="已使用", label=True)
    def display_is_used(self, instance):
        return instance.is_used

    @display(description="可使用", label=True)
    def display_is_redeemable(self, instance):
        return instance.is_redeemable

    def has_delete_permission(self, request, obj=None):
        # Token 只會被標記，不會被刪除
        return False

    @action(description="標記為無效")
    def invalidate_tokens(self, request, queryset):
        self._set_validity(request, queryset, False)

    @action(description="標記為有效")
    def revalidate_tokens(self, request, queryset):
        self._set_validity(request, queryset, True)

    def _set_validity(self, request, queryset, is_valid):
        # queryset.update 不會觸發 post_save，快取要自己清
        codes = list(queryset.values_list('token_code', flat=True))
        updated = queryset.update(is_valid=is_valid)
        cache = get_token_cache()
        for code in codes:
            cache.delete_safe(CacheKeys.token(code))
        messages.success(request, f"已更新 {updated} 個 Token")
