# permissions.py
# -*- coding: utf-8 -*-
"""
RBAC for the application.
- role_required([...]): main route decorator, applies login_required first.
- ensure_city_admin / ensure_store_access: object-level checks for the
  city-wide and per-store views, raising Forbidden.
- can_view_city / can_view_store return True/False for a given user.

Roles (models.Role):
- citizen     : walks, friends, ranking
- store_owner : everything a citizen can do + their own store's stats/traffic
- city_admin  : city rollups, every store, store creation

Every role check branches on each Role member explicitly; a member without a
branch raises instead of silently falling through to "allowed".
"""

import logging
from functools import wraps
from typing import Iterable, Set

from flask_login import current_user, login_required

from errors import Forbidden
from models import Role

logger = logging.getLogger(__name__)


# ----------------------------- ROUTE DECORATOR ----------------------------- #
def role_required(allowed_roles: Iterable[Role]):
    """
    Restrict a view to the given roles.
    Example:
        @role_required([Role.CITY_ADMIN])
        def view(): ...

    - Anonymous caller → 401 from Flask-Login.
    - Wrong role → Forbidden (403 JSON via the app error handler).
    """
    if isinstance(allowed_roles, Role):
        allowed: Set[Role] = {allowed_roles}
    else:
        allowed = set(allowed_roles or [])

    def decorator(view_func):
        @wraps(view_func)
        @login_required
        def wrapped(*args, **kwargs):
            role = getattr(current_user, "role", None)
            if role in allowed:
                return view_func(*args, **kwargs)
            logger.warning("role %s denied for %s", role, view_func.__name__)
            raise Forbidden("Forbidden: insufficient role for this action")

        return wrapped
    return decorator


# --------------------------- OBJECT-LEVEL CHECKS --------------------------- #
def can_view_city(user) -> bool:
    role = user.role
    if role is Role.CITY_ADMIN:
        return True
    if role is Role.STORE_OWNER:
        return False
    if role is Role.CITIZEN:
        return False
    raise ValueError(f"unhandled role {role!r}")


def can_view_store(user, store) -> bool:
    role = user.role
    if role is Role.CITY_ADMIN:
        return True
    if role is Role.STORE_OWNER:
        return store.owner_id == user.id
    if role is Role.CITIZEN:
        return False
    raise ValueError(f"unhandled role {role!r}")


def ensure_city_admin(user) -> None:
    if not can_view_city(user):
        logger.warning("user %s (%s) denied city-wide view", user.id, user.role.value)
        raise Forbidden("Forbidden: only city admins can view city-wide data")


def ensure_store_access(user, store) -> None:
    if not can_view_store(user, store):
        logger.warning("user %s (%s) denied access to store %s", user.id, user.role.value, store.id)
        raise Forbidden("Forbidden: can only view own store")
