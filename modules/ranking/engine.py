# -*- coding: utf-8 -*-
"""
Leaderboards over walk totals.

Ordering contract (also used for the city top walkers, with distance first):
    1. total energy, descending
    2. total distance, descending
    3. user id, ascending
Positions are 1..N in that order; tied users still get distinct positions.
Nothing here is persisted, every call recomputes from the current walks.
"""

from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Tuple

from models import User
from modules.friends.resolver import FriendshipResolver
from modules.walks.stats import StatsAggregator, UserTotals
from records import RecordStore


@dataclass(frozen=True)
class RankingScope:
    """Candidate selection: every user, or one user plus their friends."""

    friends_of: Optional[int] = None

    @classmethod
    def global_(cls) -> "RankingScope":
        return cls()

    @classmethod
    def for_friends_of(cls, user_id: int) -> "RankingScope":
        return cls(friends_of=user_id)

    @property
    def is_global(self) -> bool:
        return self.friends_of is None


@dataclass(frozen=True)
class RankingEntry:
    id: int
    position: int
    name: str
    distance: float
    energy: float
    walks: int = 0

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "position": self.position,
            "name": self.name,
            "distance": self.distance,
            "energy": self.energy,
            "walks": self.walks,
        }


def by_energy(item: Tuple[User, UserTotals]):
    user, totals = item
    return (-totals.total_energy, -totals.total_distance, user.id)


def by_distance(item: Tuple[User, UserTotals]):
    user, totals = item
    return (-totals.total_distance, -totals.total_energy, user.id)


def rank(rows: Iterable[Tuple[User, UserTotals]], key: Callable = by_energy,
         limit: Optional[int] = None) -> List[RankingEntry]:
    """Sort (user, totals) pairs with ``key`` and assign sequential positions."""
    ordered = sorted(rows, key=key)
    if limit is not None:
        ordered = ordered[:limit]
    return [
        RankingEntry(
            id=user.id,
            position=index + 1,
            name=user.display_name,
            distance=totals.total_distance,
            energy=totals.total_energy,
            walks=totals.total_walks,
        )
        for index, (user, totals) in enumerate(ordered)
    ]


class RankingEngine:
    def __init__(self, records: RecordStore) -> None:
        self.records = records
        self.stats = StatsAggregator(records)
        self.friends = FriendshipResolver(records)

    def candidates(self, scope: RankingScope) -> List[User]:
        if scope.is_global:
            return self.records.all_users()
        me = self.records.get_user(scope.friends_of)
        friends = self.friends.resolve_friends(scope.friends_of)
        return ([me] if me is not None else []) + friends

    def compute_ranking(self, scope: RankingScope) -> List[RankingEntry]:
        rows = [(user, self.stats.compute_user_totals(user.id)) for user in self.candidates(scope)]
        return rank(rows, key=by_energy)
