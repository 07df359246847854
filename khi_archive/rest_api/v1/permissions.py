"""
Content permissions
"""
import rules  # type: ignore[import]
from rest_framework.exceptions import NotAuthenticated
from rest_framework.permissions import SAFE_METHODS, BasePermission

from khi_archive.apps.accounts.constants import ACCESS_DENIED_MESSAGE, FORBIDDEN_MESSAGE


class ContentPermissions(BasePermission):
    """
    Anyone may read archive content; changing it needs
    ``khi_content.change_content``.
    """
    message = ACCESS_DENIED_MESSAGE

    def has_permission(self, request, view) -> bool:
        if request.method in SAFE_METHODS:
            return rules.has_perm("khi_content.view_content", request.user)
        if not request.user or not request.user.is_authenticated:
            raise NotAuthenticated(FORBIDDEN_MESSAGE)
        return request.user.has_perm("khi_content.change_content")
