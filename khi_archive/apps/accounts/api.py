"""
Accounts API

Role assignment, permission checks and the bearer-token blacklist. Issuing
and verifying tokens is not done here; see ``authentication.py`` for how the
blacklist plugs into request authentication.
"""
from __future__ import annotations

from datetime import datetime
from logging import getLogger

from django.db.transaction import atomic

from khi_archive.lib.audit import utc_now
from khi_archive.lib.fields import create_hash_digest

from .constants import PUBLIC_URLS, TOKEN_PREFIX
from .data import AccountPrincipal
from .models import AccountRole, BlacklistedToken
from .roles import ROLE_PERMISSIONS, Permission, Role, get_authorities

# The public API that will be re-exported by khi_archive.api.accounts is
# listed in the __all__ entries below. Internal helper functions that are
# private to this module should start with an underscore.
__all__ = [
    "blacklist_token",
    "get_bearer_token",
    "get_principal",
    "get_user_authorities",
    "get_user_role",
    "is_public_url",
    "is_token_blacklisted",
    "purge_expired_tokens",
    "set_user_role",
    "user_has_permission",
]

logger = getLogger(__name__)


def _token_digest(token: str) -> str:
    return create_hash_digest(token.encode("utf-8"))


def is_public_url(path: str) -> bool:
    """
    True if ``path`` is one of the routes that skip authentication.

    A trailing slash doesn't matter; anything else must match exactly.
    """
    return (path.rstrip("/") or "/") in PUBLIC_URLS


def get_bearer_token(header_value: str | None) -> str | None:
    """
    Extract the token from an ``Authorization: Bearer <token>`` header value.

    Returns None if the header is missing, uses another scheme, or has no
    token after the prefix.
    """
    if not header_value or not header_value.startswith(TOKEN_PREFIX):
        return None
    return header_value[len(TOKEN_PREFIX):].strip() or None


def blacklist_token(token: str, expires_at: datetime, now: datetime | None = None) -> BlacklistedToken:
    """
    Revoke ``token`` until ``expires_at``. Blacklisting it again only ever
    extends the expiry.
    """
    with atomic():
        entry, created = BlacklistedToken.objects.select_for_update().get_or_create(
            token_digest=_token_digest(token),
            defaults={"expires_at": expires_at, "created": now or utc_now()},
        )
        if not created and expires_at > entry.expires_at:
            entry.expires_at = expires_at
            entry.save(update_fields=["expires_at"])
    logger.info("Token blacklisted | id=%s expires_at=%s", entry.pk, entry.expires_at)
    return entry


def is_token_blacklisted(token: str) -> bool:
    return BlacklistedToken.objects.filter(token_digest=_token_digest(token)).exists()


def purge_expired_tokens(now: datetime | None = None) -> int:
    """
    Delete blacklist entries whose token has already expired. Returns the count.
    """
    deleted, _ = BlacklistedToken.objects.filter(expires_at__lte=now or utc_now()).delete()
    logger.debug("Purged %s expired blacklisted tokens", deleted)
    return deleted


def set_user_role(user, role: Role | str) -> AccountRole:
    """
    Give ``user`` the ``role``, replacing any role they had.
    """
    account_role, _ = AccountRole.objects.update_or_create(
        user=user,
        defaults={"role": Role(role)},
    )
    logger.info("Role set | user=%s role=%s", user.pk, account_role.role)
    return account_role


def get_user_role(user) -> Role | None:
    if user is None or not getattr(user, "is_authenticated", False):
        return None
    role = AccountRole.objects.filter(user=user).values_list("role", flat=True).first()
    return Role(role) if role else None


def get_user_authorities(user) -> list[str]:
    """
    Authority strings for ``user``'s role, or an empty list if they have none.
    """
    role = get_user_role(user)
    return get_authorities(role) if role else []


def user_has_permission(user, permission: Permission | str) -> bool:
    """
    True if ``user``'s role grants ``permission``.
    """
    role = get_user_role(user)
    return role is not None and Permission(permission) in ROLE_PERMISSIONS[role]


def get_principal(user) -> AccountPrincipal:
    """
    Describe ``user`` as an AccountPrincipal (role and authorities included).
    """
    role = get_user_role(user)
    return AccountPrincipal(
        user_id=user.pk,
        username=user.get_username(),
        role=role,
        authorities=get_authorities(role) if role else (),
    )
