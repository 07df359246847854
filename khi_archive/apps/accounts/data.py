"""
Plain data objects describing an authenticated account.
"""
from __future__ import annotations

from attrs import define, field

from .constants import AUTHORITIES, ID_CLAIM
from .roles import Role


@define(frozen=True)
class AccountPrincipal:
    """
    Who a request is acting as, and what they may do.

    ``to_claims`` gives the token claims the authentication service puts in
    a bearer token for this account.
    """
    user_id: int
    username: str
    role: Role | None
    authorities: tuple[str, ...] = field(factory=tuple, converter=tuple)

    def to_claims(self) -> dict:
        return {
            ID_CLAIM: self.user_id,
            AUTHORITIES: list(self.authorities),
        }
