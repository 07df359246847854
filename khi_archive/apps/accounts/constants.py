"""
Fixed values shared by the authentication layer.

The messages are part of the public HTTP contract: clients match on them.
"""

TOKEN_PREFIX = "Bearer "
HEADER_STRING = "Authorization"

AUTHORITIES = "authorities"
ID_CLAIM = "id"

TOKEN_CANNOT_BE_VERIFIED = "Token can not be verified"
FORBIDDEN_MESSAGE = "You need to log in to access this page"
ACCESS_DENIED_MESSAGE = "You do not have permission to access this page"

# Routes that never require authentication.
PUBLIC_URLS = (
    "/api/auth/admin/register",
    "/api/auth/admin/login",
    "/api/auth/admin/reset-password",
)
