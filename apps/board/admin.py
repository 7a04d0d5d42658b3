# apps/board/admin.py

from django.contrib import admin

from .models import Task


@admin.register(Task)
class TaskAdmin(admin.ModelAdmin):
    """Admin das tarefas - leitura por dono e ordem"""

    list_display = ['title', 'owner_id', 'category', 'order', 'created_at']
    list_filter = ['category']
    search_fields = ['title', 'description', 'owner_id']
    ordering = ['owner_id', 'order', 'created_at']
    readonly_fields = ['id', 'owner_id', 'created_at']
