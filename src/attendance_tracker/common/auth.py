from __future__ import annotations

from dataclasses import dataclass
from functools import wraps
from typing import Optional

import jwt
from flask import current_app, g, request

from ..core.enums import Role
from ..core.exceptions import AuthenticationError, AuthorizationError


@dataclass(frozen=True)
class Principal:
    """Authenticated caller, as issued by the auth service's token."""

    id: str
    role: Role
    name: Optional[str] = None


def decode_principal(token: str, *, secret: str, algorithm: str = "HS256") -> Principal:
    try:
        payload = jwt.decode(token, secret, algorithms=[algorithm])
    except jwt.ExpiredSignatureError:
        raise AuthenticationError("Token expired") from None
    except jwt.InvalidTokenError:
        raise AuthenticationError("Invalid token") from None

    # Tokens carry the user either nested under "user" or at the top level.
    user = payload.get("user") if isinstance(payload.get("user"), dict) else payload
    user_id = user.get("id") or user.get("studentId") or user.get("sub")
    try:
        role = Role(str(user.get("role", "")).lower())
    except ValueError:
        raise AuthenticationError("Token carries no valid role") from None
    if not user_id:
        raise AuthenticationError("Token carries no user id")

    return Principal(id=str(user_id), role=role, name=user.get("name"))


def _bearer_token() -> str:
    header = request.headers.get("Authorization", "")
    if not header.startswith("Bearer "):
        raise AuthenticationError("Missing token")
    return header[len("Bearer "):].strip()


def role_required(*roles: Role):
    """Require a valid bearer token; restrict to ``roles`` when given."""

    allowed = set(roles)

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            principal = decode_principal(
                _bearer_token(),
                secret=current_app.config["JWT_SECRET"],
                algorithm=current_app.config.get("JWT_ALGORITHM", "HS256"),
            )
            if allowed and principal.role not in allowed:
                raise AuthorizationError("Forbidden")
            g.principal = principal
            return view(*args, **kwargs)

        return wrapper

    return decorator


def current_principal() -> Principal:
    return g.principal
