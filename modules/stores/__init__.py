"""Stores and city module package."""

from flask import Blueprint

bp = Blueprint("stores", __name__, url_prefix="/api")

from . import routes  # noqa: E402  pylint: disable=wrong-import-position

__all__ = ["bp", "routes"]
