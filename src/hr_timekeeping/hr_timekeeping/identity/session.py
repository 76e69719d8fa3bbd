"""Read the acting principal from the Flask session.

The authentication collaborator stores ``employee_id`` and ``role`` in the
session after login; ``role`` may be the numeric code (1 admin, 2 partime,
3 fulltime) or the role name.
"""

from __future__ import annotations

from functools import wraps

from flask import g, session

from ..core.codes import ROLE_CODES
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, AuthorizationError, ValidationError
from .model import Principal


def _parse_role(raw: object) -> Role:
    if isinstance(raw, Role):
        return raw
    if isinstance(raw, str) and not raw.strip().isdigit():
        try:
            return Role(raw.strip().upper())
        except ValueError:
            raise AuthenticationError("Unknown role in session")
    try:
        return ROLE_CODES.to_member(raw)
    except ValidationError:
        raise AuthenticationError("Unknown role in session")


def current_principal() -> Principal:
    principal = g.get("principal")
    if principal is not None:
        return principal

    if "employee_id" not in session or "role" not in session:
        raise AuthenticationError("Access token is required")
    try:
        employee_id = int(session["employee_id"])
    except (TypeError, ValueError):
        raise AuthenticationError("Invalid session")

    principal = Principal(employee_id=employee_id, role=_parse_role(session["role"]))
    g.principal = principal
    return principal


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        current_principal()
        return view(*args, **kwargs)

    return wrapper


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if not current_principal().is_admin:
            raise AuthorizationError("Insufficient permissions")
        return view(*args, **kwargs)

    return wrapper
