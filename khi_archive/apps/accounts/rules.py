"""
Django rules-based permissions for accounts and content.
"""
from __future__ import annotations

from typing import Callable, Union

import django.contrib.auth.models
# typing support in rules depends on https://github.com/dfunckt/django-rules/pull/177
import rules  # type: ignore[import]

from . import api
from .roles import Permission

UserType = Union[
    django.contrib.auth.models.User, django.contrib.auth.models.AnonymousUser
]


def _role_grants(permission: Permission) -> Callable[[UserType], bool]:
    """
    Build a predicate that passes when the user's role grants ``permission``.
    """
    @rules.predicate(name=f"role_grants_{permission.codename}")
    def predicate(user: UserType) -> bool:
        return api.user_has_permission(user, permission)
    return predicate


@rules.predicate
def has_account_role(user: UserType) -> bool:
    """
    Any role at all (EMPLOYEE and up) lets a user edit archive content.
    """
    return api.get_user_role(user) is not None


can_change_content = rules.is_staff | rules.is_superuser | has_account_role


# Users (permission names follow Permission, e.g. "user:delete" -> "user_delete")
for _permission in Permission:
    rules.add_perm(f"khi_accounts.{_permission.codename}", _role_grants(_permission))

# Content
rules.add_perm("khi_content.view_content", rules.always_allow)
rules.add_perm("khi_content.change_content", can_change_content)
