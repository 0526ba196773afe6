# staycore_backend/security.py
from dataclasses import dataclass
from functools import wraps
from typing import Optional

from flask_jwt_extended import get_jwt, verify_jwt_in_request

from .errors import AuthError

ADMIN_ROLE = "admin"


@dataclass(frozen=True)
class AuthContext:
    """Who is asking. Passed explicitly into every service query."""

    identity: Optional[str] = None
    role: Optional[str] = None

    @classmethod
    def from_claims(cls, claims):
        claims = claims or {}
        sub = claims.get("sub")
        role = claims.get("role")
        # identity may be a dict carrying the role on older tokens
        if isinstance(sub, dict):
            role = role or sub.get("role")
            sub = sub.get("username") or sub.get("email")
        return cls(identity=sub, role=role)

    @classmethod
    def admin(cls, identity="admin"):
        return cls(identity=identity, role=ADMIN_ROLE)

    @classmethod
    def anonymous(cls):
        return cls()

    @property
    def is_authenticated(self):
        return self.identity is not None

    @property
    def is_admin(self):
        return self.role == ADMIN_ROLE

    def require_admin(self):
        if not self.is_authenticated:
            raise AuthError("unauthorized", "Admin token required")
        if not self.is_admin:
            raise AuthError("forbidden", "Admin access required")
        return self


def current_auth():
    """AuthContext for the current request; anonymous when no valid token is sent."""
    verify_jwt_in_request(optional=True)
    claims = get_jwt()
    if not claims:
        return AuthContext.anonymous()
    return AuthContext.from_claims(claims)


def admin_required(fn):
    """Usage: @admin_required on a route; the handler gets `auth` as a keyword."""
    @wraps(fn)
    def wrapper(*args, **kwargs):
        verify_jwt_in_request()
        auth = AuthContext.from_claims(get_jwt()).require_admin()
        return fn(*args, auth=auth, **kwargs)
    return wrapper
