from types import SimpleNamespace

import pytest

from errors import Forbidden
from models import Role
from permissions import can_view_city, can_view_store, ensure_city_admin, ensure_store_access


def _user(role, user_id=1):
    return SimpleNamespace(id=user_id, role=role)


STORE = SimpleNamespace(id=10, owner_id=1)


@pytest.mark.parametrize("role", list(Role))
def test_every_role_has_a_decision(role):
    # an unhandled role would raise ValueError here
    assert isinstance(can_view_city(_user(role)), bool)
    assert isinstance(can_view_store(_user(role), STORE), bool)


def test_city_view_is_admin_only():
    ensure_city_admin(_user(Role.CITY_ADMIN))
    for role in (Role.CITIZEN, Role.STORE_OWNER):
        with pytest.raises(Forbidden):
            ensure_city_admin(_user(role))


def test_store_view_for_admin_and_owner_only():
    ensure_store_access(_user(Role.CITY_ADMIN, user_id=99), STORE)
    ensure_store_access(_user(Role.STORE_OWNER, user_id=1), STORE)

    with pytest.raises(Forbidden):
        ensure_store_access(_user(Role.STORE_OWNER, user_id=2), STORE)
    with pytest.raises(Forbidden):
        ensure_store_access(_user(Role.CITIZEN, user_id=1), STORE)


def test_unknown_role_is_not_silently_allowed():
    with pytest.raises(ValueError):
        can_view_store(_user("root"), STORE)
