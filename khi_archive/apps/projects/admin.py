"""
Django Admin pages for Projects.

Projects should be edited through the REST API so that logs and audit fields
are written; the admin here is mostly for inspection.
"""
from django.contrib import admin

from .models import Project, ProjectLog, ProjectMedia


class ProjectMediaInline(admin.TabularInline):
    model = ProjectMedia
    fields = ["sort_order", "media_type", "url", "caption"]
    extra = 0


class ProjectLogInline(admin.TabularInline):
    """
    Read-only view of a Project's change log.
    """
    model = ProjectLog
    fields = ["created_at", "action", "field_name", "old_value", "new_value"]
    readonly_fields = fields
    ordering = ["-created_at"]
    extra = 0

    def has_add_permission(self, request, obj=None):
        return False

    def has_change_permission(self, request, obj=None):
        return False


@admin.register(Project)
class ProjectAdmin(admin.ModelAdmin):
    """
    Project admin with its media and log inline.
    """
    list_display = ["id", "title", "project_type", "project_date", "updated_at"]
    list_filter = ["project_type"]
    search_fields = ["title", "tags__name", "keywords__name"]
    readonly_fields = ["created_at", "updated_at", "created_by", "updated_by"]
    filter_horizontal = ["tags", "keywords"]
    inlines = [ProjectMediaInline, ProjectLogInline]
