# -*- coding: utf-8 -*-
"""
City-wide and per-store rollups.

- compute_city_stats   : energy of all walks, user counts, top walkers by distance
- compute_store_stats  : pedestrian/energy totals of one store plus "today"
- compute_store_rollup : kinetic floors, totems, energy and foot traffic over stores

"Today" for a store is the latest snapshot dated today on the UTC clock that
stamps created_at. When the store has no snapshot for today, the latest
snapshot overall stands in for it.
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional, Sequence

from sqlalchemy.exc import IntegrityError

from errors import Conflict, NotFound, ValidationFailure
from models import Role, Store, StoreTraffic, utc_today
from modules.ranking.engine import RankingEntry, by_distance, rank
from modules.walks.stats import StatsAggregator
from records import RecordStore

logger = logging.getLogger(__name__)

TOP_WALKERS_LIMIT = 10
STORE_TAKEN_MESSAGE = "This store owner already has a store"


@dataclass(frozen=True)
class CityStats:
    total_energy: float = 0.0
    total_users: int = 0
    active_users: int = 0
    top_walkers: List[RankingEntry] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "totalEnergy": self.total_energy,
            "totalUsers": self.total_users,
            "activeUsers": self.active_users,
            "topWalkers": [w.to_dict() for w in self.top_walkers],
        }


@dataclass(frozen=True)
class StoreStats:
    total_pedestrians: int = 0
    total_energy: float = 0.0
    today_pedestrians: int = 0
    today_energy: float = 0.0

    def to_dict(self) -> dict:
        return {
            "totalPedestrians": self.total_pedestrians,
            "totalEnergy": self.total_energy,
            "todayPedestrians": self.today_pedestrians,
            "todayEnergy": self.today_energy,
        }


@dataclass(frozen=True)
class StoreRollup:
    total_kinetic_floors: int = 0
    total_led_totems: int = 0
    total_store_energy: float = 0.0
    total_foot_traffic: int = 0
    peak_traffic_store: Optional[Store] = None

    def to_dict(self) -> dict:
        return {
            "totalKineticFloors": self.total_kinetic_floors,
            "totalLedTotems": self.total_led_totems,
            "totalStoreEnergy": self.total_store_energy,
            "totalFootTraffic": self.total_foot_traffic,
            "peakTrafficStore": self.peak_traffic_store.to_dict() if self.peak_traffic_store else None,
        }


def today_snapshot(rows: Sequence[StoreTraffic], today: date) -> Optional[StoreTraffic]:
    """Latest row dated ``today``; otherwise the latest row. ``rows`` are in insertion order."""
    if not rows:
        return None
    dated_today = [r for r in rows if r.date == today]
    if dated_today:
        return dated_today[-1]
    return rows[-1]


def compute_store_rollup(stores: Sequence[Store]) -> StoreRollup:
    if not stores:
        return StoreRollup()
    # max() keeps the first of equal values; sort by id so ties go to the lowest id
    by_id = sorted(stores, key=lambda s: s.id)
    return StoreRollup(
        total_kinetic_floors=sum(s.kinetic_floors or 0 for s in stores),
        total_led_totems=sum(s.led_totems or 0 for s in stores),
        total_store_energy=float(sum(s.energy_today or 0 for s in stores)),
        total_foot_traffic=sum(s.daily_foot_traffic or 0 for s in stores),
        peak_traffic_store=max(by_id, key=lambda s: s.daily_foot_traffic or 0),
    )


class CityAggregator:
    def __init__(self, records: RecordStore, top_walkers_limit: int = TOP_WALKERS_LIMIT) -> None:
        self.records = records
        self.stats = StatsAggregator(records)
        self.top_walkers_limit = top_walkers_limit

    # ------ reads ------
    def compute_city_stats(self) -> CityStats:
        walks = self.records.all_walks()
        walkers = []
        for user in self.records.all_users():
            totals = self.stats.compute_user_totals(user.id)
            if totals.total_distance > 0:
                walkers.append((user, totals))

        return CityStats(
            total_energy=float(sum(w.energy for w in walks)),
            total_users=self.records.count_users(),
            active_users=len({w.user_id for w in walks}),
            top_walkers=rank(walkers, key=by_distance, limit=self.top_walkers_limit),
        )

    def compute_store_stats(self, store_id: int, today: Optional[date] = None) -> StoreStats:
        if self.records.get_store(store_id) is None:
            raise NotFound("Store not found")
        rows = self.records.traffic_for_store(store_id)
        if not rows:
            return StoreStats()

        snapshot = today_snapshot(rows, today or utc_today())
        return StoreStats(
            total_pedestrians=sum(r.pedestrians for r in rows),
            total_energy=float(sum(r.energy_generated for r in rows)),
            today_pedestrians=snapshot.pedestrians,
            today_energy=float(snapshot.energy_generated),
        )

    def compute_store_rollup(self) -> StoreRollup:
        return compute_store_rollup(self.records.all_stores())

    # ------ writes ------
    def create_store(self, owner_username: str, name: str, location: str, kinetic_floors: int = 0,
                     led_totems: int = 0, energy_today: float = 0.0, daily_foot_traffic: int = 0,
                     logo: Optional[str] = None) -> Store:
        owner = self.records.get_user_by_username(owner_username)
        if owner is None:
            raise NotFound("Owner not found")
        if owner.role is not Role.STORE_OWNER:
            raise ValidationFailure("The given user is not a store owner")
        if self.records.store_for_owner(owner.id) is not None:
            raise Conflict(STORE_TAKEN_MESSAGE)

        try:
            store = self.records.insert(Store(
                owner_id=owner.id,
                name=name,
                location=location,
                logo=logo,
                kinetic_floors=kinetic_floors,
                led_totems=led_totems,
                energy_today=energy_today,
                daily_foot_traffic=daily_foot_traffic,
            ))
        except IntegrityError:
            logger.warning("concurrent store creation for owner %s refused", owner.username)
            raise Conflict(STORE_TAKEN_MESSAGE) from None
        logger.info("store %s (%s) created for owner %s", store.id, store.name, owner.username)
        return store

    def record_traffic(self, store_id: int, pedestrians: int, energy_generated: float,
                       on_date: Optional[date] = None) -> StoreTraffic:
        if self.records.get_store(store_id) is None:
            raise NotFound("Store not found")
        snapshot = self.records.insert(StoreTraffic(
            store_id=store_id,
            pedestrians=pedestrians,
            energy_generated=energy_generated,
            date=on_date or utc_today(),
        ))
        logger.info("traffic snapshot %s for store %s on %s", snapshot.id, store_id, snapshot.date)
        return snapshot
