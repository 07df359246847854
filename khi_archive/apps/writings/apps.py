"""
Django metadata for the Writings Django application.
"""
from django.apps import AppConfig


class WritingsConfig(AppConfig):
    """
    Configuration for the Writings Django application.
    """

    name = "khi_archive.apps.writings"
    verbose_name = "KHI Archive > Writings"
    default_auto_field = "django.db.models.BigAutoField"
    label = "khi_writings"
