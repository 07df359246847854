"""
Django metadata for the Projects Django application.
"""
from django.apps import AppConfig


class ProjectsConfig(AppConfig):
    """
    Configuration for the Projects Django application.
    """

    name = "khi_archive.apps.projects"
    verbose_name = "KHI Archive > Projects"
    default_auto_field = "django.db.models.BigAutoField"
    label = "khi_projects"
