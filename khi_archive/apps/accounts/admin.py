"""
Django Admin pages for account roles and the token blacklist.
"""
from django.contrib import admin

from .models import AccountRole, BlacklistedToken


@admin.register(AccountRole)
class AccountRoleAdmin(admin.ModelAdmin):
    list_display = ["id", "user", "role"]
    list_filter = ["role"]
    search_fields = ["user__username", "user__email"]
    raw_id_fields = ["user"]


@admin.register(BlacklistedToken)
class BlacklistedTokenAdmin(admin.ModelAdmin):
    """
    Read-only. Tokens are blacklisted through the API, never by hand.
    """
    list_display = ["id", "token_digest", "expires_at", "created"]
    readonly_fields = ["token_digest", "expires_at", "created"]

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False
