"""HTTP routes for stores, store traffic and the city dashboard."""

from datetime import date

from flask import current_app, jsonify
from flask_login import current_user, login_required

from errors import NotFound, ValidationFailure
from models import Role
from permissions import ensure_city_admin, ensure_store_access, role_required
from records import current_records
from utils import parse_number, parse_text, request_data

from . import bp
from .aggregator import CityAggregator


def _aggregator(records) -> CityAggregator:
    return CityAggregator(records, top_walkers_limit=current_app.config["CITY_TOP_WALKERS"])


def _store_for_viewer(records, store_id: int):
    """Store the current user may see; a missing store is only reported to admins."""
    store = records.get_store(store_id)
    if store is None:
        ensure_city_admin(current_user)
        raise NotFound("Store not found")
    ensure_store_access(current_user, store)
    return store


# ---------- City dashboard ----------
@bp.route("/city/stats")
@role_required([Role.CITY_ADMIN])
def city_stats():
    return jsonify(_aggregator(current_records()).compute_city_stats().to_dict())


# ---------- Stores (admin) ----------
@bp.route("/stores")
@role_required([Role.CITY_ADMIN])
def list_stores():
    return jsonify([s.to_dict() for s in current_records().all_stores()])


@bp.route("/stores/rollup")
@role_required([Role.CITY_ADMIN])
def store_rollup():
    return jsonify(_aggregator(current_records()).compute_store_rollup().to_dict())


@bp.route("/stores", methods=["POST"])
@role_required([Role.CITY_ADMIN])
def create_store():
    data = request_data()
    # validate everything before touching the session
    owner_username = parse_text(data.get("ownerUsername"), "ownerUsername", min_length=3)
    name = parse_text(data.get("name"), "name")
    location = parse_text(data.get("location"), "location")
    kinetic_floors = parse_number(data.get("kineticFloors"), "kineticFloors", integer=True, default=0)
    led_totems = parse_number(data.get("ledTotems"), "ledTotems", integer=True, default=0)
    energy_today = parse_number(data.get("energyToday"), "energyToday", default=0.0)
    daily_foot_traffic = parse_number(data.get("dailyFootTraffic"), "dailyFootTraffic", integer=True, default=0)
    logo = parse_text(data.get("logo"), "logo", required=False)

    records = current_records()
    store = _aggregator(records).create_store(
        owner_username=owner_username,
        name=name,
        location=location,
        kinetic_floors=kinetic_floors,
        led_totems=led_totems,
        energy_today=energy_today,
        daily_foot_traffic=daily_foot_traffic,
        logo=logo,
    )
    records.commit()
    return jsonify(store.to_dict()), 201


# ---------- Store owner ----------
@bp.route("/stores/my-store")
@role_required([Role.STORE_OWNER])
def my_store():
    store = current_records().store_for_owner(current_user.id)
    if store is None:
        raise NotFound("Store not found")
    return jsonify(store.to_dict())


@bp.route("/stores/<int:store_id>/stats")
@login_required
def store_stats(store_id: int):
    records = current_records()
    store = _store_for_viewer(records, store_id)
    return jsonify(_aggregator(records).compute_store_stats(store.id).to_dict())


@bp.route("/stores/<int:store_id>/traffic", methods=["POST"])
@login_required
def record_traffic(store_id: int):
    records = current_records()
    store = _store_for_viewer(records, store_id)

    data = request_data()
    pedestrians = parse_number(data.get("pedestrians"), "pedestrians", integer=True)
    energy_generated = parse_number(data.get("energyGenerated"), "energyGenerated")
    on_date = None
    if data.get("date"):
        try:
            on_date = date.fromisoformat(str(data["date"]))
        except ValueError:
            raise ValidationFailure("date must be YYYY-MM-DD") from None

    snapshot = _aggregator(records).record_traffic(store.id, pedestrians, energy_generated, on_date)
    records.commit()
    return jsonify(snapshot.to_dict()), 201
