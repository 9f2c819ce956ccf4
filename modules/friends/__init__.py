"""Friends module package."""

from flask import Blueprint

bp = Blueprint("friends", __name__, url_prefix="/api/friends")

from . import routes  # noqa: E402  pylint: disable=wrong-import-position

__all__ = ["bp", "routes"]
