from django.contrib import admin
from unfold.admin import ModelAdmin

from .models import FlowerResponse, Response


class EntryAdmin(ModelAdmin):
    search_fields = ('full_name', 'contact_number', 'token__token_code')
    list_filter = ('contest_type',)
    ordering = ('submitted_at',)
    list_per_page = 50
    list_select_related = ('token',)

    def has_add_permission(self, request):
        # 答案只能從前台送出，確保 Token 同步被標記
        return False

    def has_change_permission(self, request, obj=None):
        return False


@admin.register(Response)
class ResponseAdmin(EntryAdmin):
    list_display = ('id', 'full_name', 'contact_number', 'papaya_seed_guess', 'token', 'submitted_at')


@admin.register(FlowerResponse)
class FlowerResponseAdmin(EntryAdmin):
    list_display = ('id', 'full_name', 'contact_number', 'secret_flower_name', 'token', 'submitted_at')
