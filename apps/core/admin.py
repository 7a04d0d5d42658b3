# apps/core/admin.py

from django.contrib import admin
from django.utils.html import format_html

from .models import UserInfo


@admin.register(UserInfo)
class UserInfoAdmin(admin.ModelAdmin):
    """Admin dos cadastros de usuário"""

    list_display = ['email', 'display_name', 'user_id', 'avatar', 'created_at']
    search_fields = ['email', 'display_name', 'user_id']
    ordering = ['-created_at']
    readonly_fields = ['created_at']

    def avatar(self, obj):
        """Miniatura da foto do usuário"""
        if not obj.photo_url:
            return '-'
        return format_html(
            '<img src="{}" style="width: 24px; height: 24px; border-radius: 50%;">',
            obj.photo_url
        )

    avatar.short_description = 'Foto'
