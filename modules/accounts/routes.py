"""HTTP routes for authentication and user profiles."""

import logging

from flask import jsonify, session
from flask_login import current_user, login_required, login_user, logout_user

from errors import NotFound, ValidationFailure
from extensions import db, login_manager
from models import Role, User
from modules.friends.resolver import FriendshipResolver
from modules.walks.stats import StatsAggregator
from records import current_records
from utils import request_data

from . import bp
from .credentials import register_user, verify_credentials

logger = logging.getLogger(__name__)

# roles a visitor may pick when registering; admins and store owners are created by create_user.py
SELF_SERVICE_ROLES = {Role.CITIZEN}


@login_manager.user_loader
def load_user(user_id: str | None) -> User | None:
    """Resolve a ``User`` instance for Flask-Login sessions."""

    if not user_id:
        return None
    return db.session.get(User, int(user_id))


# ---------- Auth ----------
@bp.route("/auth/register", methods=["POST"])
def register():
    data = request_data()
    try:
        role = Role(data.get("role") or Role.CITIZEN.value)
    except ValueError:
        raise ValidationFailure("Unknown role") from None
    if role not in SELF_SERVICE_ROLES:
        raise ValidationFailure("This role cannot be chosen at registration")

    records = current_records()
    user = register_user(
        records,
        username=data.get("username"),
        password=data.get("password"),
        display_name=data.get("displayName"),
        role=role,
    )
    records.commit()
    return jsonify(user=user.to_dict()), 201


@bp.route("/auth/login", methods=["POST"])
def login():
    data = request_data()
    user = verify_credentials(current_records(), data.get("username"), data.get("password"))
    if user is None:
        logger.info("failed login for %r", data.get("username"))
        return jsonify(ok=False, error="Invalid credentials"), 401

    # drop whatever the old session carried before binding the new user
    session.clear()
    login_user(user)
    return jsonify(user=user.to_dict())


@bp.route("/auth/logout", methods=["POST"])
@login_required
def logout():
    logout_user()
    session.clear()
    return jsonify(ok=True, message="Logged out successfully")


@bp.route("/auth/me")
@login_required
def me():
    return jsonify(user=current_user.to_dict())


# ---------- Users ----------
@bp.route("/users/<int:user_id>")
@login_required
def user_profile(user_id: int):
    records = current_records()
    user = records.get_user(user_id)
    if user is None:
        raise NotFound("User not found")

    payload = {"user": user.to_dict()}
    payload.update(StatsAggregator(records).compute_user_totals(user.id).to_dict())
    payload["friendsCount"] = len(FriendshipResolver(records).resolve_friends(user.id))
    return jsonify(payload)


@bp.route("/users/<int:user_id>/totals")
@login_required
def user_totals(user_id: int):
    records = current_records()
    if records.get_user(user_id) is None:
        raise NotFound("User not found")
    return jsonify(StatsAggregator(records).compute_user_totals(user_id).to_dict())


@bp.route("/users/by-username/<string:username>")
@login_required
def user_by_username(username: str):
    user = current_records().get_user_by_username(username)
    if user is None:
        raise NotFound("User not found")
    return jsonify(user.to_dict())
