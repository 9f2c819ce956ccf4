"""Walks module package."""

from flask import Blueprint

bp = Blueprint("walks", __name__, url_prefix="/api/walks")

from . import routes  # noqa: E402  pylint: disable=wrong-import-position

__all__ = ["bp", "routes"]
