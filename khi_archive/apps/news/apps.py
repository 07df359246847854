"""
Django metadata for the News Django application.
"""
from django.apps import AppConfig


class NewsConfig(AppConfig):
    """
    Configuration for the News Django application.
    """

    name = "khi_archive.apps.news"
    verbose_name = "KHI Archive > News"
    default_auto_field = "django.db.models.BigAutoField"
    label = "khi_news"
