from __future__ import annotations

import pytest

from tastequest.catalog.models import Item, Location
from tastequest.config import EngineConfig
from tastequest.profile.models import DecisionType
from tastequest.session.energy import (
    add_favorite,
    apply_decision,
    decision_cost,
    grant,
    is_exhausted,
    spend,
    unlock_grant,
)
from tastequest.session.models import SessionStats


def _item(**overrides) -> Item:
    data = {
        "id": "r1",
        "cuisine": "Coffee",
        "price_range": 2,
        "location": Location(latitude=0.0, longitude=0.0),
    }
    data.update(overrides)
    return Item(**data)


def test_default_stats():
    stats = SessionStats()
    assert stats.energy == 100.0
    assert stats.total_decisions == 0
    assert stats.treasures_found == 0
    assert stats.favorite_ids == []
    assert stats.wishlist_ids == []


def test_costs():
    assert decision_cost(DecisionType.like) == 1.0
    assert decision_cost(DecisionType.reject) == 1.0
    assert decision_cost(DecisionType.wishlist) == 1.0
    assert decision_cost(DecisionType.skip) == 0.5


def test_exhaustion():
    assert is_exhausted(SessionStats(energy=0.0))
    assert not is_exhausted(SessionStats(energy=0.5))


def test_spend_floors_at_zero():
    stats = apply_decision(SessionStats(energy=0.5), _item(), DecisionType.like)
    assert stats.energy == 0.0
    assert spend(SessionStats(energy=0.2), 5).energy == 0.0


def test_grant_caps_at_max():
    assert grant(SessionStats(energy=95.0), 10).energy == 100.0
    assert grant(SessionStats(energy=40.0), 15).energy == 55.0
    assert grant(SessionStats(energy=5.0), 10, EngineConfig(max_energy=12.0)).energy == 12.0


def test_unlock_grant_amounts():
    assert unlock_grant(_item()) == 10.0
    assert unlock_grant(_item(is_treasure=True)) == 15.0


def test_skip_costs_half():
    stats = apply_decision(SessionStats(), _item(), DecisionType.skip)
    assert stats.energy == 99.5
    assert stats.total_decisions == 1
    assert stats.favorite_ids == []


def test_like_adds_favorite_once():
    stats = apply_decision(SessionStats(), _item(), DecisionType.like)
    stats = apply_decision(stats, _item(), DecisionType.like)
    assert stats.favorite_ids == ["r1"]
    assert stats.total_decisions == 2
    assert stats.energy == 98.0


def test_wishlist_adds_to_wishlist():
    stats = apply_decision(SessionStats(), _item(id="w"), DecisionType.wishlist)
    assert stats.wishlist_ids == ["w"]
    assert stats.favorite_ids == []


def test_reject_only_costs_energy():
    stats = apply_decision(SessionStats(energy=10.0), _item(), DecisionType.reject)
    assert stats == SessionStats(energy=9.0, total_decisions=1)


def test_liking_a_treasure_grants_bonus():
    stats = apply_decision(SessionStats(energy=50.0), _item(is_treasure=True), DecisionType.like)
    assert stats.energy == 54.0
    assert stats.treasures_found == 1


def test_treasure_bonus_only_on_like():
    stats = apply_decision(SessionStats(energy=50.0), _item(is_treasure=True), DecisionType.wishlist)
    assert stats.energy == 49.0
    assert stats.treasures_found == 0


def test_input_stats_not_mutated():
    stats = SessionStats(energy=20.0)
    apply_decision(stats, _item(), DecisionType.like)
    assert stats.energy == 20.0
    assert stats.favorite_ids == []


def test_add_favorite_is_idempotent():
    stats = add_favorite(add_favorite(SessionStats(), "a"), "a")
    assert stats.favorite_ids == ["a"]


def test_energy_stays_in_bounds():
    stats = SessionStats(energy=3.0)
    kinds = [DecisionType.like, DecisionType.skip, DecisionType.reject, DecisionType.wishlist]
    for i in range(40):
        if stats.is_exhausted:
            stats = grant(stats, 15 if i % 2 else 10)
        else:
            treasure = i % 7 == 0
            stats = apply_decision(stats, _item(is_treasure=treasure), kinds[i % 4])
        assert 0.0 <= stats.energy <= 100.0


@pytest.mark.parametrize("max_energy", [150.0, 100.5, 0.0, -1.0])
def test_config_rejects_energy_cap_outside_stats_bounds(max_energy):
    with pytest.raises(ValueError):
        EngineConfig(max_energy=max_energy)


def test_config_accepts_full_cap():
    assert EngineConfig(max_energy=100.0).max_energy == 100.0
