"""HTTP routes for walk sessions."""

from flask import current_app, jsonify
from flask_login import current_user, login_required

from errors import NotFound
from records import current_records
from utils import parse_number, request_data

from . import bp
from .stats import record_walk


@bp.route("", methods=["POST"])
@login_required
def create_walk():
    data = request_data()
    distance = parse_number(data.get("distance"), "distance")
    duration = parse_number(data.get("duration"), "duration", integer=True)
    energy = data.get("energy")
    if energy is not None:
        energy = parse_number(energy, "energy")

    records = current_records()
    walk = record_walk(
        records,
        current_user.id,
        distance=distance,
        duration=duration,
        energy=energy,
        wh_per_km=current_app.config["ENERGY_WH_PER_KM"],
    )
    records.commit()
    return jsonify(walk.to_dict()), 201


@bp.route("/user/<int:user_id>")
@login_required
def list_walks(user_id: int):
    records = current_records()
    if records.get_user(user_id) is None:
        raise NotFound("User not found")
    return jsonify([w.to_dict() for w in records.walks_for_user(user_id)])
