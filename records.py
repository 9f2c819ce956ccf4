"""
Record Store: the repository handle the aggregators are built on.

RecordStore wraps a SQLAlchemy session and exposes get-by-id, named predicate
queries, insert, update and delete. It holds no derived logic. Aggregators get one
at construction, so the same code runs against the request session in the app
and against an in-memory SQLite session in the tests.
"""

from typing import List, Optional

from sqlalchemy import and_, or_

from extensions import db
from models import (
    ACTIVE_FRIENDSHIP_STATUSES,
    Friendship,
    FriendshipStatus,
    Store,
    StoreTraffic,
    User,
    Walk,
)


class RecordStore:
    def __init__(self, session) -> None:
        self.session = session

    # ---------- users ----------
    def get_user(self, user_id: int) -> Optional[User]:
        return self.session.get(User, user_id)

    def get_user_by_username(self, username: str) -> Optional[User]:
        return self.session.query(User).filter_by(username=username).first()

    def all_users(self) -> List[User]:
        return self.session.query(User).order_by(User.id.asc()).all()

    def lock_users(self, *user_ids: int) -> List[User]:
        """Existing users among ``user_ids``, row-locked in id order."""
        return (self.session.query(User)
                .filter(User.id.in_(sorted(set(user_ids))))
                .order_by(User.id.asc())
                .with_for_update()
                .all())

    def count_users(self) -> int:
        return self.session.query(User).count()

    # ---------- walks ----------
    def walks_for_user(self, user_id: int) -> List[Walk]:
        return (self.session.query(Walk)
                .filter_by(user_id=user_id)
                .order_by(Walk.id.asc())
                .all())

    def all_walks(self) -> List[Walk]:
        return self.session.query(Walk).order_by(Walk.id.asc()).all()

    # ---------- friendships ----------
    def get_friendship(self, friendship_id: int, for_update: bool = False) -> Optional[Friendship]:
        query = self.session.query(Friendship).filter_by(id=friendship_id)
        if for_update:
            query = query.with_for_update()
        return query.first()

    def friendships_involving(self, user_id: int, status: Optional[FriendshipStatus] = None) -> List[Friendship]:
        query = self.session.query(Friendship).filter(
            or_(Friendship.requester_id == user_id, Friendship.recipient_id == user_id)
        )
        if status is not None:
            query = query.filter(Friendship.status == status)
        return query.order_by(Friendship.id.asc()).all()

    def incoming_friendships(self, user_id: int, status: FriendshipStatus) -> List[Friendship]:
        return (self.session.query(Friendship)
                .filter(Friendship.recipient_id == user_id, Friendship.status == status)
                .order_by(Friendship.id.asc())
                .all())

    def friendships_between(self, user_a: int, user_b: int, statuses=ACTIVE_FRIENDSHIP_STATUSES,
                            for_update: bool = False) -> List[Friendship]:
        """Rows for the unordered pair {user_a, user_b} in any of ``statuses``."""
        query = self.session.query(Friendship).filter(
            or_(
                and_(Friendship.requester_id == user_a, Friendship.recipient_id == user_b),
                and_(Friendship.requester_id == user_b, Friendship.recipient_id == user_a),
            ),
            Friendship.status.in_(list(statuses)),
        )
        if for_update:
            query = query.with_for_update()
        return query.order_by(Friendship.id.asc()).all()

    # ---------- stores ----------
    def get_store(self, store_id: int) -> Optional[Store]:
        return self.session.get(Store, store_id)

    def store_for_owner(self, owner_id: int) -> Optional[Store]:
        return self.session.query(Store).filter_by(owner_id=owner_id).first()

    def all_stores(self) -> List[Store]:
        return self.session.query(Store).order_by(Store.id.asc()).all()

    def traffic_for_store(self, store_id: int) -> List[StoreTraffic]:
        """Snapshots of one store in insertion order."""
        return (self.session.query(StoreTraffic)
                .filter_by(store_id=store_id)
                .order_by(StoreTraffic.id.asc())
                .all())

    # ---------- writes ----------
    def insert(self, record):
        self.session.add(record)
        self.session.flush()
        return record

    def update(self, record):
        self.session.flush()
        return record

    def delete(self, record) -> None:
        self.session.delete(record)
        self.session.flush()

    def commit(self) -> None:
        self.session.commit()


def current_records() -> RecordStore:
    """RecordStore bound to the Flask-SQLAlchemy session of the current app context."""
    return RecordStore(db.session)
