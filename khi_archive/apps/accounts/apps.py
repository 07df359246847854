"""
Django metadata for the Accounts Django application.
"""
from django.apps import AppConfig


class AccountsConfig(AppConfig):
    """
    Configuration for the Accounts Django application.
    """

    name = "khi_archive.apps.accounts"
    verbose_name = "KHI Archive > Accounts"
    default_auto_field = "django.db.models.BigAutoField"
    label = "khi_accounts"
