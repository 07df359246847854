"""
Public API for roles, permissions and the bearer-token blacklist.
"""
# These wildcard imports are okay because these modules declare __all__.
# pylint: disable=wildcard-import
from ..apps.accounts.api import *
from ..apps.accounts.constants import *
from ..apps.accounts.roles import *
