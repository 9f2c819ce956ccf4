import pytest

from factories import add_walk, make_user
from modules.walks.stats import StatsAggregator, UserTotals, record_walk
from errors import NotFound


def test_user_without_walks_has_zeroed_totals(records):
    user = make_user(records, "idle")

    totals = StatsAggregator(records).compute_user_totals(user.id)

    assert totals == UserTotals(0, 0.0, 0.0)
    assert totals.to_dict() == {"totalWalks": 0, "totalDistance": 0.0, "totalEnergy": 0.0}


def test_unknown_user_is_not_an_error(records):
    assert StatsAggregator(records).compute_user_totals(999) == UserTotals()


def test_totals_sum_only_own_walks(records):
    alice = make_user(records, "alice")
    bob = make_user(records, "bob")
    add_walk(records, alice, 1.5, energy=75)
    add_walk(records, alice, 2.25, energy=112.5)
    add_walk(records, bob, 10.0, energy=500)

    totals = StatsAggregator(records).compute_user_totals(alice.id)

    assert totals.total_walks == 2
    assert totals.total_distance == pytest.approx(3.75)
    assert totals.total_energy == pytest.approx(187.5)


def test_totals_do_not_depend_on_insertion_order(records):
    first = make_user(records, "first")
    second = make_user(records, "second")
    values = [(0.4, 20.0), (3.1, 155.0), (12.0, 600.0)]
    for distance, energy in values:
        add_walk(records, first, distance, energy=energy)
    for distance, energy in reversed(values):
        add_walk(records, second, distance, energy=energy)

    stats = StatsAggregator(records)
    a = stats.compute_user_totals(first.id)
    b = stats.compute_user_totals(second.id)

    assert a.total_walks == b.total_walks == 3
    assert a.total_energy == pytest.approx(b.total_energy)
    assert a.total_distance == pytest.approx(b.total_distance)


def test_record_walk_derives_energy_from_distance(records):
    user = make_user(records, "walker")

    walk = record_walk(records, user.id, distance=2.0, duration=900, wh_per_km=50.0)

    assert walk.energy == pytest.approx(100.0)
    assert StatsAggregator(records).compute_user_totals(user.id).total_energy == pytest.approx(100.0)


def test_record_walk_for_missing_user(records):
    with pytest.raises(NotFound):
        record_walk(records, 404, distance=1.0, duration=60)
    assert records.all_walks() == []
