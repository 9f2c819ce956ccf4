import pytest
from sqlalchemy.exc import IntegrityError

from errors import Conflict, Forbidden, NotFound, ValidationFailure
from factories import link, make_user
from models import FriendshipStatus
from modules.friends.resolver import FriendshipResolver


@pytest.fixture()
def people(records):
    return {
        "a": make_user(records, "ana.costa", display_name="Ana Costa"),
        "b": make_user(records, "joao.santos", display_name="João Santos"),
        "c": make_user(records, "carla.mendes", display_name="Carla Mendes"),
    }


def _ids(users):
    return [u.id for u in users]


def test_request_then_accept(records, people):
    a, b = people["a"], people["b"]
    resolver = FriendshipResolver(records)

    request = resolver.request_friendship(a.id, b.id)
    assert request.status is FriendshipStatus.PENDING
    assert resolver.resolve_friends(a.id) == []

    pending = resolver.resolve_pending_incoming(b.id)
    assert len(pending) == 1
    assert pending[0].friendship.requester_id == a.id
    assert pending[0].requester_name == "Ana Costa"
    assert pending[0].requester_username == "ana.costa"
    assert resolver.resolve_pending_incoming(a.id) == []  # outgoing is not listed

    resolver.accept(request.id, b.id)

    assert _ids(resolver.resolve_friends(a.id)) == [b.id]
    assert _ids(resolver.resolve_friends(b.id)) == [a.id]
    assert resolver.resolve_pending_incoming(b.id) == []


def test_pending_and_rejected_are_not_friends(records, people):
    a, b, c = people["a"], people["b"], people["c"]
    link(records, a, b, status=FriendshipStatus.PENDING)
    link(records, c, a, status=FriendshipStatus.REJECTED)

    assert FriendshipResolver(records).resolve_friends(a.id) == []


def test_friends_exclude_self(records, people):
    a, b = people["a"], people["b"]
    link(records, a, b)
    link(records, a, a)

    assert _ids(FriendshipResolver(records).resolve_friends(a.id)) == [b.id]


def test_missing_counterpart_is_dropped(records, people):
    a = people["a"]
    ghost = make_user(records, "ghost")
    link(records, a, ghost)
    records.delete(ghost)

    assert FriendshipResolver(records).resolve_friends(a.id) == []


def test_pending_request_from_removed_user_uses_placeholders(records, people):
    a, ghost = people["a"], make_user(records, "ghost")
    link(records, ghost, a, status=FriendshipStatus.PENDING)
    records.delete(ghost)

    [pending] = FriendshipResolver(records).resolve_pending_incoming(a.id)
    assert pending.requester_username == "unknown"
    assert pending.to_dict()["requesterName"] == "Unknown user"


def test_duplicate_request_conflicts_in_either_direction(records, people):
    a, b = people["a"], people["b"]
    resolver = FriendshipResolver(records)
    resolver.request_friendship(a.id, b.id)

    with pytest.raises(Conflict):
        resolver.request_friendship(a.id, b.id)
    with pytest.raises(Conflict):
        resolver.request_friendship(b.id, a.id)
    assert len(records.friendships_involving(a.id)) == 1


def test_rejected_is_terminal_but_a_new_request_is_allowed(records, people):
    a, b = people["a"], people["b"]
    resolver = FriendshipResolver(records)
    first = resolver.request_friendship(a.id, b.id)
    resolver.reject(first.id, b.id)

    with pytest.raises(Conflict):
        resolver.accept(first.id, b.id)

    second = resolver.request_friendship(a.id, b.id)
    assert second.id != first.id
    assert second.status is FriendshipStatus.PENDING


def test_only_recipient_answers(records, people):
    a, b, c = people["a"], people["b"], people["c"]
    resolver = FriendshipResolver(records)
    request = resolver.request_friendship(a.id, b.id)

    with pytest.raises(Forbidden):
        resolver.accept(request.id, a.id)
    with pytest.raises(Forbidden):
        resolver.reject(request.id, c.id)
    with pytest.raises(NotFound):
        resolver.accept(12345, b.id)


def test_request_validation(records, people):
    a = people["a"]
    resolver = FriendshipResolver(records)

    with pytest.raises(ValidationFailure):
        resolver.request_friendship(a.id, a.id)
    with pytest.raises(NotFound):
        resolver.request_friendship(a.id, 999)


def test_unfriend_only_removes_accepted(records, people):
    a, b, c = people["a"], people["b"], people["c"]
    resolver = FriendshipResolver(records)
    link(records, a, b)
    link(records, a, c, status=FriendshipStatus.PENDING)

    resolver.unfriend(b.id, a.id)
    assert resolver.resolve_friends(a.id) == []

    with pytest.raises(NotFound):
        resolver.unfriend(a.id, c.id)
    assert len(resolver.resolve_pending_incoming(c.id)) == 1


def test_database_allows_one_active_row_per_pair(records, people):
    a, b = people["a"], people["b"]
    link(records, a, b, status=FriendshipStatus.REJECTED)
    link(records, a, b, status=FriendshipStatus.PENDING)

    with pytest.raises(IntegrityError):
        link(records, b, a, status=FriendshipStatus.ACCEPTED)
    records.session.rollback()


def test_request_racing_the_reverse_request_conflicts(records, people, monkeypatch):
    a, b = people["a"], people["b"]
    resolver = FriendshipResolver(records)
    resolver.request_friendship(a.id, b.id)
    # the reverse request checked the pair before the first one was written
    monkeypatch.setattr(records, "friendships_between", lambda *args, **kwargs: [])

    with pytest.raises(Conflict):
        resolver.request_friendship(b.id, a.id)
    records.session.rollback()
