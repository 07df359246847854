"""
Django Admin pages for Writings.
"""
from django.contrib import admin

from .models import Writing, WritingLog


@admin.register(Writing)
class WritingAdmin(admin.ModelAdmin):
    """
    Writing admin. Edits made here are not written to the WritingLog.
    """
    list_display = ["id", "title_ckb", "title_kmr", "writing_topic", "published_by_institute"]
    list_filter = ["writing_topic", "published_by_institute"]
    search_fields = ["title_ckb", "title_kmr", "writer_ckb", "writer_kmr"]
    readonly_fields = ["created_at", "updated_at", "created_by", "updated_by"]
    filter_horizontal = ["tags_ckb", "tags_kmr", "keywords_ckb", "keywords_kmr"]


@admin.register(WritingLog)
class WritingLogAdmin(admin.ModelAdmin):
    list_display = ["id", "writing_ref", "action", "actor_name", "created_at"]
    list_filter = ["action"]
    readonly_fields = [
        "writing", "writing_ref", "action", "actor_id", "actor_name",
        "request_id", "meta", "details", "created_at",
    ]

    def has_add_permission(self, request):
        return False
