"""Ranking module package."""

from flask import Blueprint

bp = Blueprint("ranking", __name__, url_prefix="/api/ranking")

from . import routes  # noqa: E402  pylint: disable=wrong-import-position

__all__ = ["bp", "routes"]
