"""HTTP routes for friends and friend requests."""

from flask import jsonify
from flask_login import current_user, login_required

from errors import Forbidden, NotFound, ValidationFailure
from records import current_records
from utils import parse_number, request_data

from . import bp
from .resolver import FriendshipResolver


@bp.route("/<int:user_id>")
@login_required
def list_friends(user_id: int):
    records = current_records()
    if records.get_user(user_id) is None:
        raise NotFound("User not found")
    friends = FriendshipResolver(records).resolve_friends(user_id)
    return jsonify([f.to_dict() for f in friends])


@bp.route("/<int:user_id>/requests")
@login_required
def pending_requests(user_id: int):
    if user_id != current_user.id:
        raise Forbidden("Forbidden: can only view your own friend requests")
    pending = FriendshipResolver(current_records()).resolve_pending_incoming(user_id)
    return jsonify([p.to_dict() for p in pending])


@bp.route("/request", methods=["POST"])
@login_required
def send_request():
    data = request_data()
    records = current_records()

    # recipient by id or by username, as the friends page only knows the username
    if data.get("recipientId") is not None:
        recipient_id = parse_number(data.get("recipientId"), "recipientId", integer=True)
    elif data.get("username"):
        recipient = records.get_user_by_username(str(data["username"]).strip())
        if recipient is None:
            raise NotFound("User not found")
        recipient_id = recipient.id
    else:
        raise ValidationFailure("recipientId or username is required")

    friendship = FriendshipResolver(records).request_friendship(current_user.id, recipient_id)
    records.commit()
    return jsonify(friendship.to_dict()), 201


@bp.route("/<int:friendship_id>/accept", methods=["PUT"])
@login_required
def accept_request(friendship_id: int):
    records = current_records()
    friendship = FriendshipResolver(records).accept(friendship_id, current_user.id)
    records.commit()
    return jsonify(ok=True, friendship=friendship.to_dict())


@bp.route("/<int:friendship_id>/reject", methods=["PUT"])
@login_required
def reject_request(friendship_id: int):
    records = current_records()
    friendship = FriendshipResolver(records).reject(friendship_id, current_user.id)
    records.commit()
    return jsonify(ok=True, friendship=friendship.to_dict())


@bp.route("/<int:friend_id>", methods=["DELETE"])
@login_required
def remove_friend(friend_id: int):
    records = current_records()
    FriendshipResolver(records).unfriend(current_user.id, friend_id)
    records.commit()
    return jsonify(ok=True)
