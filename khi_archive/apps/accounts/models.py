"""
Account data that lives alongside Django's own user model.

* ``AccountRole`` gives a user one of the fixed roles from ``roles.py``.
* ``BlacklistedToken`` records bearer tokens that were revoked (e.g. on
  logout) before they expired. Only a digest of the token is stored.
"""
from __future__ import annotations

from django.conf import settings
from django.db import models
from django.utils.translation import gettext_lazy as _

from khi_archive.lib.fields import hash_field, manual_date_time_field

from .roles import Role

__all__ = [
    "AccountRole",
    "BlacklistedToken",
]


class AccountRole(models.Model):
    """
    The role held by a single user. Users without a row have no role.
    """
    id = models.BigAutoField(primary_key=True)
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="khi_account_role",
    )
    role = models.CharField(max_length=20, choices=Role.choices)

    class Meta:
        verbose_name = _("Account Role")
        verbose_name_plural = _("Account Roles")

    def __str__(self) -> str:
        return f"<{self.__class__.__name__}> ({self.id}) user:{self.user_id} {self.role}"


class BlacklistedToken(models.Model):
    """
    A revoked bearer token.

    Rows can be purged once ``expires_at`` has passed, since the token would
    be rejected as expired anyway.
    """
    id = models.BigAutoField(primary_key=True)
    token_digest = hash_field()
    expires_at = manual_date_time_field()
    created = manual_date_time_field()

    class Meta:
        constraints = [
            models.UniqueConstraint(
                fields=["token_digest"],
                name="khi_acct_bltoken_uniq_digest",
            ),
        ]
        indexes = [
            models.Index(fields=["expires_at"], name="khi_acct_bltoken_idx_expires"),
        ]
        verbose_name = _("Blacklisted Token")
        verbose_name_plural = _("Blacklisted Tokens")

    def __str__(self) -> str:
        return f"<{self.__class__.__name__}> ({self.id}) {self.token_digest[:8]}… expires {self.expires_at}"
