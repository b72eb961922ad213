# users/services/identity.py

"""
ACTOR RESOLUTION

Every mutating back-office operation needs an authenticated actor for audit
attribution. Services accept the Django user (request.user) and resolve it
here; anonymous or inactive users raise AuthorizationError.
"""

from __future__ import annotations

from dataclasses import dataclass

from common.exceptions import AuthorizationError


@dataclass(frozen=True)
class Actor:
    uid: str
    name: str


def resolve_actor(user) -> Actor:
    if user is None or not getattr(user, "is_authenticated", False):
        raise AuthorizationError("User not authenticated.")
    if not getattr(user, "is_active", True):
        raise AuthorizationError("User account is inactive.")

    name = getattr(user, "display_name", "") or str(user)
    return Actor(uid=str(user.pk), name=name)
