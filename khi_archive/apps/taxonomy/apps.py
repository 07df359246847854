"""
Django metadata for the Taxonomy Django application.
"""
from django.apps import AppConfig


class TaxonomyConfig(AppConfig):
    """
    Configuration for the Taxonomy Django application.
    """

    name = "khi_archive.apps.taxonomy"
    verbose_name = "KHI Archive > Taxonomy"
    default_auto_field = "django.db.models.BigAutoField"
    label = "khi_taxonomy"
