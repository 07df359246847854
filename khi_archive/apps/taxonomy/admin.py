"""
Django Admin pages for Tags and Keywords.
"""
from django.contrib import admin

from .models import Keyword, Tag


@admin.register(Tag)
class TagAdmin(admin.ModelAdmin):
    """
    Tags are shared by every content item, so they can be renamed here but
    are normally created by the content APIs.
    """
    list_display = ["id", "name"]
    search_fields = ["name"]
    ordering = ["name"]


@admin.register(Keyword)
class KeywordAdmin(admin.ModelAdmin):
    list_display = ["id", "name"]
    search_fields = ["name"]
    ordering = ["name"]
