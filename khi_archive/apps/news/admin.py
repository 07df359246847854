"""
Django Admin pages for News.
"""
from django.contrib import admin

from .models import News, NewsAuditLog, NewsCategory, NewsMedia, NewsSubCategory


class NewsSubCategoryInline(admin.TabularInline):
    model = NewsSubCategory
    fields = ["name_ckb", "name_kmr"]
    extra = 0


@admin.register(NewsCategory)
class NewsCategoryAdmin(admin.ModelAdmin):
    list_display = ["id", "name_ckb", "name_kmr"]
    search_fields = ["name_ckb", "name_kmr"]
    inlines = [NewsSubCategoryInline]


class NewsMediaInline(admin.TabularInline):
    model = NewsMedia
    fields = ["sort_order", "media_type", "url", "external_url", "embed_url"]
    extra = 0


class NewsAuditLogInline(admin.TabularInline):
    model = NewsAuditLog
    fields = ["action_time", "action", "performed_by", "note"]
    readonly_fields = fields
    ordering = ["-action_time"]
    extra = 0

    def has_add_permission(self, request, obj=None):
        return False

    def has_change_permission(self, request, obj=None):
        return False


@admin.register(News)
class NewsAdmin(admin.ModelAdmin):
    """
    News admin, mostly for inspection. Edits made here are not audited.
    """
    list_display = ["id", "title_ckb", "title_kmr", "date_published", "category"]
    list_filter = ["category"]
    search_fields = ["title_ckb", "title_kmr"]
    readonly_fields = ["created_at", "updated_at", "created_by", "updated_by"]
    filter_horizontal = ["tags_ckb", "tags_kmr", "keywords_ckb", "keywords_kmr"]
    date_hierarchy = "date_published"
    inlines = [NewsMediaInline, NewsAuditLogInline]
