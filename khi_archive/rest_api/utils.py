"""
Utilities for the REST API
"""
from edx_rest_framework_extensions.auth.session.authentication import (  # type: ignore[import]
    SessionAuthenticationAllowInactiveUser,
)
from rest_framework import status
from rest_framework.exceptions import APIException

from khi_archive.apps.accounts.authentication import BlacklistAwareJwtAuthentication


def view_auth_classes(func_or_class):
    """
    Function and class decorator that abstracts the authentication classes for api views.
    """
    def _decorator(func_or_class):
        """
        Requires either JWT (bearer token, checked against the blacklist) or
        Session-based authentication.
        """
        func_or_class.authentication_classes = (
            BlacklistAwareJwtAuthentication,
            SessionAuthenticationAllowInactiveUser,
        )
        return func_or_class
    return _decorator(func_or_class)


class Conflict(APIException):
    """
    The request clashes with existing data, e.g. a duplicate unique name.
    """
    status_code = status.HTTP_409_CONFLICT
    default_detail = "The request conflicts with existing data."
    default_code = "conflict"
