# -*- coding: utf-8 -*-
"""
Friendship resolution and the request workflow.

State machine of one Friendship row:
    pending --accept-->   accepted
    pending --reject-->   rejected   (terminal, a new request is a new row)
    accepted --unfriend--> deleted

At most one active (pending or accepted) row exists per unordered pair of
users; request_friendship refuses a second one with Conflict.
"""

import logging
from dataclasses import dataclass
from typing import List

from sqlalchemy.exc import IntegrityError

from errors import Conflict, Forbidden, NotFound, ValidationFailure
from models import Friendship, FriendshipStatus, User
from records import RecordStore

logger = logging.getLogger(__name__)

UNKNOWN_REQUESTER_NAME = "Unknown user"
UNKNOWN_REQUESTER_USERNAME = "unknown"
DUPLICATE_REQUEST_MESSAGE = "A friendship or pending request already exists between these users"


@dataclass(frozen=True)
class PendingRequest:
    friendship: Friendship
    requester_name: str
    requester_username: str

    def to_dict(self) -> dict:
        payload = self.friendship.to_dict()
        payload["requesterName"] = self.requester_name
        payload["requesterUsername"] = self.requester_username
        return payload


class FriendshipResolver:
    def __init__(self, records: RecordStore) -> None:
        self.records = records

    # ------ reads ------
    def resolve_friends(self, user_id: int) -> List[User]:
        """
        Users with an accepted friendship with ``user_id``, in either direction.
        Counterparts that no longer exist are skipped. Ordered by user id.
        """
        friend_ids = set()
        for friendship in self.records.friendships_involving(user_id, FriendshipStatus.ACCEPTED):
            other_id = friendship.other_party(user_id)
            if other_id != user_id:
                friend_ids.add(other_id)

        friends = []
        for other_id in sorted(friend_ids):
            user = self.records.get_user(other_id)
            if user is not None:
                friends.append(user)
        return friends

    def resolve_pending_incoming(self, user_id: int) -> List[PendingRequest]:
        """Pending requests addressed to ``user_id`` with the requester's names attached."""
        pending = []
        for friendship in self.records.incoming_friendships(user_id, FriendshipStatus.PENDING):
            requester = self.records.get_user(friendship.requester_id)
            pending.append(PendingRequest(
                friendship=friendship,
                requester_name=requester.display_name if requester else UNKNOWN_REQUESTER_NAME,
                requester_username=requester.username if requester else UNKNOWN_REQUESTER_USERNAME,
            ))
        return pending

    # ------ workflow ------
    def request_friendship(self, requester_id: int, recipient_id: int) -> Friendship:
        if requester_id == recipient_id:
            raise ValidationFailure("Cannot send a friend request to yourself")
        # both user rows are locked in id order, so A->B and B->A serialise here
        found = {user.id for user in self.records.lock_users(requester_id, recipient_id)}
        if requester_id not in found:
            raise NotFound("Requester not found")
        if recipient_id not in found:
            raise NotFound("User not found")
        if self.records.friendships_between(requester_id, recipient_id):
            raise Conflict(DUPLICATE_REQUEST_MESSAGE)

        try:
            friendship = self.records.insert(Friendship(
                requester_id=requester_id,
                recipient_id=recipient_id,
                status=FriendshipStatus.PENDING,
            ))
        except IntegrityError:
            # uq_friendships_active_pair caught a concurrent request for the same pair
            logger.warning("concurrent friend request %s -> %s refused", requester_id, recipient_id)
            raise Conflict(DUPLICATE_REQUEST_MESSAGE) from None
        logger.info("friend request %s: %s -> %s", friendship.id, requester_id, recipient_id)
        return friendship

    def accept(self, friendship_id: int, acting_user_id: int) -> Friendship:
        return self._answer(friendship_id, acting_user_id, FriendshipStatus.ACCEPTED)

    def reject(self, friendship_id: int, acting_user_id: int) -> Friendship:
        return self._answer(friendship_id, acting_user_id, FriendshipStatus.REJECTED)

    def _answer(self, friendship_id: int, acting_user_id: int, new_status: FriendshipStatus) -> Friendship:
        friendship = self.records.get_friendship(friendship_id, for_update=True)
        if friendship is None:
            raise NotFound("Friend request not found")
        if friendship.recipient_id != acting_user_id:
            raise Forbidden("Forbidden: only the recipient can answer a friend request")
        if friendship.status is not FriendshipStatus.PENDING:
            raise Conflict(f"Friend request is already {friendship.status.value}")

        friendship.status = new_status
        self.records.update(friendship)
        logger.info("friend request %s %s by user %s", friendship.id, new_status.value, acting_user_id)
        return friendship

    def unfriend(self, user_id: int, friend_id: int) -> None:
        """Delete the accepted friendship of the pair. Pending or rejected rows are left alone."""
        accepted = self.records.friendships_between(
            user_id, friend_id, statuses=(FriendshipStatus.ACCEPTED,), for_update=True,
        )
        if not accepted:
            raise NotFound("Friendship not found")
        for friendship in accepted:
            self.records.delete(friendship)
        logger.info("user %s unfriended %s", user_id, friend_id)
