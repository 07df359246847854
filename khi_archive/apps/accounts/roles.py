"""
Roles and the permissions they grant.

The mapping is static: changing what a role can do is a code change, not a
data change. A user's effective authorities are their role's permission
strings plus a ``ROLE_<name>`` entry for the role itself.
"""
from __future__ import annotations

from django.db import models
from django.utils.translation import gettext_lazy as _

from khi_archive.lib.cache import lru_cache

__all__ = [
    "Permission",
    "ROLE_PERMISSIONS",
    "Role",
    "get_authorities",
]


class Permission(models.TextChoices):
    USER_CREATE = "user:create", _("Create users")
    USER_READ = "user:read", _("Read users")
    USER_UPDATE = "user:update", _("Update users")
    USER_DELETE = "user:delete", _("Delete users")

    @property
    def codename(self) -> str:
        """
        The name used for this permission in Django, e.g. "user_create".
        """
        return self.value.replace(":", "_")


class Role(models.TextChoices):
    EMPLOYEE = "EMPLOYEE", _("Employee")
    ADMIN = "ADMIN", _("Admin")
    SUPER_ADMIN = "SUPER_ADMIN", _("Super admin")


ROLE_PERMISSIONS: dict[Role, frozenset[Permission]] = {
    Role.EMPLOYEE: frozenset({
        Permission.USER_CREATE,
        Permission.USER_READ,
        Permission.USER_UPDATE,
    }),
    Role.ADMIN: frozenset({
        Permission.USER_CREATE,
        Permission.USER_READ,
        Permission.USER_UPDATE,
        Permission.USER_DELETE,
    }),
    Role.SUPER_ADMIN: frozenset({
        Permission.USER_CREATE,
        Permission.USER_READ,
        Permission.USER_UPDATE,
        Permission.USER_DELETE,
    }),
}


@lru_cache(maxsize=None)
def _authorities(role: Role) -> tuple[str, ...]:
    permissions = sorted(permission.value for permission in ROLE_PERMISSIONS[role])
    return (*permissions, f"ROLE_{role.value}")


def get_authorities(role: Role | str) -> list[str]:
    """
    Authority strings for ``role``: its permissions (sorted) then ``ROLE_<name>``.

    Raises ValueError for an unknown role.
    """
    return list(_authorities(Role(role)))
