"""
DRF authentication that honors the token blacklist.
"""
from edx_rest_framework_extensions.auth.jwt.authentication import JwtAuthentication  # type: ignore[import]
from rest_framework.exceptions import AuthenticationFailed

from . import api
from .constants import HEADER_STRING, TOKEN_CANNOT_BE_VERIFIED


class BlacklistAwareJwtAuthentication(JwtAuthentication):
    """
    JWT authentication that first rejects any bearer token on the blacklist.

    Everything else (signature, expiry, user lookup) is left to the parent
    class.
    """

    def authenticate(self, request):
        header_value = request.headers.get(HEADER_STRING)
        token = api.get_bearer_token(header_value)
        if token and api.is_token_blacklisted(token):
            raise AuthenticationFailed(TOKEN_CANNOT_BE_VERIFIED)
        return super().authenticate(request)
