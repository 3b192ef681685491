import pytest

from models import state_to_dict
from tech import (purchase_tech_upgrade, can_afford_upgrade, apply_tech_effects,
                  get_available_upgrades, get_next_affordable_upgrade,
                  get_tech_multipliers, is_tier_complete, get_tier_progress,
                  get_highest_unlocked_tier)
from catalog import get_upgrade_by_id, ALL_TECH_UPGRADES, EffectKind
from config import TECH_TIERS


@pytest.fixture
def rich(state):
    state.money = 1_000_000
    return state


def test_catalog_has_seven_tiers_of_three():
    assert len(ALL_TECH_UPGRADES) == 21
    assert {u.tier for u in ALL_TECH_UPGRADES} == set(range(1, 8))


def test_sub_tier_two_requires_sub_tier_one(rich):
    before = state_to_dict(rich)
    assert not purchase_tech_upgrade(rich, "tech_2_2")
    assert state_to_dict(rich) == before


def test_tiers_themselves_are_not_gated(rich):
    assert purchase_tech_upgrade(rich, "tech_2_1")
    assert rich.current_tech_tier == 2
    assert rich.money == 1_000_000 - 500
    assert "tech_2_1" in rich.purchased_upgrades


def test_sequential_sub_tiers(rich):
    assert purchase_tech_upgrade(rich, "tech_1_2")
    assert purchase_tech_upgrade(rich, "tech_1_3")
    assert is_tier_complete(rich, 1)
    assert get_tier_progress(rich, 1) == 3


def test_cannot_buy_twice(rich):
    assert not purchase_tech_upgrade(rich, "tech_1_1")
    assert rich.purchased_upgrades.count("tech_1_1") == 1


def test_unknown_upgrade(rich):
    assert not purchase_tech_upgrade(rich, "tech_9_1")
    assert not can_afford_upgrade(rich, "tech_9_1")


def test_unaffordable_upgrade_leaves_state_alone(state):
    assert not can_afford_upgrade(state, "tech_1_2")
    assert not purchase_tech_upgrade(state, "tech_1_2")
    assert state.money == 10
    assert state.purchased_upgrades == ["tech_1_1"]


def test_tier_never_decreases(rich):
    purchase_tech_upgrade(rich, "tech_3_1")
    purchase_tech_upgrade(rich, "tech_1_2")
    assert rich.current_tech_tier == 3


def test_local_models_unlock_prestige_and_gpu(rich):
    assert purchase_tech_upgrade(rich, "tech_3_1")
    assert rich.unlocked_systems.prestige
    assert rich.unlocked_systems.gpu


def test_tier_table_holds_only_rates():
    columns = {"tier", "song_cost", "generation_time", "income_multiplier", "fan_multiplier"}
    assert all(set(entry) == columns for entry in TECH_TIERS)


def test_prestige_unlocks_come_from_upgrade_effects():
    tiers = {u.tier for u in ALL_TECH_UPGRADES
             if any(e.kind == EffectKind.UNLOCK_PRESTIGE for e in u.effects)}
    assert tiers == {3, 5, 6, 7}


def test_apply_effects_reports_only_new_unlocks(state):
    upgrade = get_upgrade_by_id("tech_3_1")
    assert sorted(apply_tech_effects(state, upgrade)) == ["gpu", "prestige"]
    assert apply_tech_effects(state, upgrade) == []


def test_available_upgrades_respect_gating(state):
    ids = [u.id for u in get_available_upgrades(state)]
    assert "tech_1_2" in ids
    assert "tech_1_3" not in ids
    assert "tech_1_1" not in ids
    assert len(ids) == 7


def test_next_affordable(state):
    assert get_next_affordable_upgrade(state) is None
    state.money = 60
    assert get_next_affordable_upgrade(state).id == "tech_1_2"


def test_breakdown_multiplies_purchased_sub_tiers(rich):
    assert get_tech_multipliers(rich) == {"speed": 1.0, "income": 1.0, "fans": 1.0}
    purchase_tech_upgrade(rich, "tech_1_2")
    purchase_tech_upgrade(rich, "tech_1_3")
    multipliers = get_tech_multipliers(rich)
    assert multipliers["speed"] == pytest.approx(1.2 * 1.5)
    assert multipliers["income"] == pytest.approx(1.1 * 1.3)
    assert multipliers["fans"] == pytest.approx(1.1)


def test_breakdown_does_not_drive_live_rates(rich):
    from songs import get_generation_time
    purchase_tech_upgrade(rich, "tech_1_2")
    purchase_tech_upgrade(rich, "tech_1_3")
    assert get_generation_time(rich) == 30


def test_highest_unlocked_tier(rich):
    assert get_highest_unlocked_tier(rich) == 1
    purchase_tech_upgrade(rich, "tech_4_1")
    assert get_highest_unlocked_tier(rich) == 4
