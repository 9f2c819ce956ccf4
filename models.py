"""Shared SQLAlchemy models."""

import enum
from datetime import date, datetime

from flask_login import UserMixin

from extensions import db


class Role(str, enum.Enum):
    CITIZEN = "citizen"
    STORE_OWNER = "store_owner"
    CITY_ADMIN = "city_admin"


class FriendshipStatus(str, enum.Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


ACTIVE_FRIENDSHIP_STATUSES = (FriendshipStatus.PENDING, FriendshipStatus.ACCEPTED)
_ACTIVE_FRIENDSHIP_CLAUSE = "status IN ('pending', 'accepted')"


def _enum_values(enum_cls):
    return [member.value for member in enum_cls]


def utc_today() -> date:
    """Calendar day on the same UTC clock as the created_at columns."""
    return datetime.utcnow().date()


def _pair_low(context):
    params = context.get_current_parameters()
    return min(params["requester_id"], params["recipient_id"])


def _pair_high(context):
    params = context.get_current_parameters()
    return max(params["requester_id"], params["recipient_id"])


class User(UserMixin, db.Model):
    """Represents a registered citizen, store owner or city administrator."""

    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(150), unique=True, nullable=False)
    display_name = db.Column(db.String(150), nullable=False)
    password = db.Column(db.String(255), nullable=False)
    role = db.Column(
        db.Enum(Role, values_callable=_enum_values, name="user_role"),
        nullable=False,
        default=Role.CITIZEN,
    )
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    def to_dict(self) -> dict:
        """Public representation; the password hash never leaves the model."""
        return {
            "id": self.id,
            "username": self.username,
            "displayName": self.display_name,
            "role": self.role.value,
        }

    def __repr__(self) -> str:  # pragma: no cover - debug helper
        return f"<User {self.username}>"


class Walk(db.Model):
    """One completed walk session. Rows are append-only."""

    __tablename__ = "walks"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)
    distance = db.Column(db.Float, nullable=False)   # km
    energy = db.Column(db.Float, nullable=False)     # Wh
    duration = db.Column(db.Integer, nullable=False)  # seconds
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "userId": self.user_id,
            "distance": self.distance,
            "energy": self.energy,
            "duration": self.duration,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }


class Friendship(db.Model):
    """
    Friend request between two users.
    pending --accept--> accepted, pending --reject--> rejected,
    accepted --unfriend--> row deleted. rejected is terminal.

    pair_low/pair_high hold the unordered pair; the partial unique index allows
    one pending or accepted row per pair whichever side sent the request.
    """

    __tablename__ = "friendships"
    __table_args__ = (
        db.Index(
            "uq_friendships_active_pair", "pair_low", "pair_high", unique=True,
            sqlite_where=db.text(_ACTIVE_FRIENDSHIP_CLAUSE),
            postgresql_where=db.text(_ACTIVE_FRIENDSHIP_CLAUSE),
        ),
    )

    id = db.Column(db.Integer, primary_key=True)
    requester_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)
    recipient_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)
    pair_low = db.Column(db.Integer, nullable=False, default=_pair_low)
    pair_high = db.Column(db.Integer, nullable=False, default=_pair_high)
    status = db.Column(
        db.Enum(FriendshipStatus, values_callable=_enum_values, name="friendship_status"),
        nullable=False,
        default=FriendshipStatus.PENDING,
    )
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    def other_party(self, user_id: int) -> int:
        return self.recipient_id if self.requester_id == user_id else self.requester_id

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "requesterId": self.requester_id,
            "recipientId": self.recipient_id,
            "status": self.status.value,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }


class Store(db.Model):
    """A participating store with kinetic floors and LED totems in front of it."""

    __tablename__ = "stores"

    id = db.Column(db.Integer, primary_key=True)
    owner_id = db.Column(db.Integer, db.ForeignKey("users.id"), unique=True, nullable=False)
    name = db.Column(db.String(150), nullable=False)
    location = db.Column(db.String(255), nullable=False)
    logo = db.Column(db.String(255))
    kinetic_floors = db.Column(db.Integer, nullable=False, default=0)
    led_totems = db.Column(db.Integer, nullable=False, default=0)
    energy_today = db.Column(db.Float, nullable=False, default=0.0)
    daily_foot_traffic = db.Column(db.Integer, nullable=False, default=0)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "ownerId": self.owner_id,
            "name": self.name,
            "location": self.location,
            "logo": self.logo,
            "kineticFloors": self.kinetic_floors,
            "ledTotems": self.led_totems,
            "energyToday": self.energy_today,
            "dailyFootTraffic": self.daily_foot_traffic,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }

    def __repr__(self) -> str:  # pragma: no cover - debug helper
        return f"<Store {self.name}>"


class StoreTraffic(db.Model):
    """Daily snapshot of pedestrians passing a store and energy generated there."""

    __tablename__ = "store_traffic"

    id = db.Column(db.Integer, primary_key=True)
    store_id = db.Column(db.Integer, db.ForeignKey("stores.id"), nullable=False, index=True)
    pedestrians = db.Column(db.Integer, nullable=False, default=0)
    energy_generated = db.Column(db.Float, nullable=False, default=0.0)
    date = db.Column(db.Date, nullable=False, default=utc_today)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "storeId": self.store_id,
            "pedestrians": self.pedestrians,
            "energyGenerated": self.energy_generated,
            "date": self.date.isoformat() if self.date else None,
        }
