"""Per-user walk totals and walk recording."""

import logging
import math
from dataclasses import dataclass
from typing import Optional

from errors import NotFound, ValidationFailure
from models import Walk
from records import RecordStore

logger = logging.getLogger(__name__)

DEFAULT_WH_PER_KM = 50.0


@dataclass(frozen=True)
class UserTotals:
    total_walks: int = 0
    total_distance: float = 0.0
    total_energy: float = 0.0

    def to_dict(self) -> dict:
        return {
            "totalWalks": self.total_walks,
            "totalDistance": self.total_distance,
            "totalEnergy": self.total_energy,
        }


class StatsAggregator:
    def __init__(self, records: RecordStore) -> None:
        self.records = records

    def compute_user_totals(self, user_id: int) -> UserTotals:
        """
        Count and sum the walks of one user. A user without walks gets
        zeroed totals, never an error.
        """
        walks = self.records.walks_for_user(user_id)
        return UserTotals(
            total_walks=len(walks),
            total_distance=float(sum(w.distance for w in walks)),
            total_energy=float(sum(w.energy for w in walks)),
        )


def record_walk(records: RecordStore, user_id: int, distance: float, duration: int,
                energy: Optional[float] = None, wh_per_km: float = DEFAULT_WH_PER_KM) -> Walk:
    """
    Append a completed walk. Values must already be validated as non-negative;
    energy defaults to ``distance * wh_per_km``.
    """
    if records.get_user(user_id) is None:
        raise NotFound("User not found")
    if energy is None:
        energy = distance * wh_per_km
        if not math.isfinite(energy):
            raise ValidationFailure("distance is out of range")
    walk = records.insert(Walk(user_id=user_id, distance=distance, energy=energy, duration=duration))
    logger.info("walk %s recorded for user %s: %.2f km, %.0f Wh", walk.id, user_id, distance, energy)
    return walk
