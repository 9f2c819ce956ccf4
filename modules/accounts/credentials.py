"""Registration and password verification."""

import logging
from typing import Optional

from werkzeug.security import check_password_hash, generate_password_hash

from errors import Conflict, ValidationFailure
from models import Role, User
from records import RecordStore

logger = logging.getLogger(__name__)

MIN_USERNAME_LENGTH = 3
MIN_PASSWORD_LENGTH = 6


def register_user(records: RecordStore, username: str, password: str, display_name: Optional[str] = None,
                  role: Role = Role.CITIZEN) -> User:
    if not isinstance(username, str) or not isinstance(password, str):
        raise ValidationFailure("username and password are required")
    username = username.strip()
    if len(username) < MIN_USERNAME_LENGTH:
        raise ValidationFailure(f"username must be at least {MIN_USERNAME_LENGTH} characters")
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationFailure(f"password must be at least {MIN_PASSWORD_LENGTH} characters")
    if records.get_user_by_username(username) is not None:
        raise Conflict("Username already exists")

    user = records.insert(User(
        username=username,
        display_name=str(display_name or "").strip() or username,
        password=generate_password_hash(password),
        role=role,
    ))
    logger.info("registered user %s (%s)", user.username, role.value)
    return user


def verify_credentials(records: RecordStore, username: str, password: str) -> Optional[User]:
    if not isinstance(username, str) or not isinstance(password, str):
        return None
    user = records.get_user_by_username(username.strip())
    if user is None or not check_password_hash(user.password, password):
        return None
    return user
