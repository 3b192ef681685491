"""
Music Industry Simulator: Tech Upgrades
Tier progression over 7 tiers x 3 sub-tiers.

Sub-tiers are gated in order (N_1 -> N_2 -> N_3); tiers are not, so any
tier's first sub-tier can be bought directly. Purchases unlock systems and
raise current_tech_tier, never lower it. Live speed/income/fan multipliers
come from the current tier's table entry (config.get_tech_tier), not from
stacking per-upgrade effects; get_tech_multipliers is informational only.
"""

import logging

from models import GameState
from catalog import (ALL_TECH_UPGRADES, EffectKind, MULTIPLIER_EFFECTS,
                     UNLOCK_EFFECTS, TechUpgrade, get_upgrade_by_id,
                     get_upgrades_by_tier)

logger = logging.getLogger("mis.tech")


# ─────────────────────────────────────────────────────
# PURCHASE
# ─────────────────────────────────────────────────────

def can_afford_upgrade(state: GameState, upgrade_id: str) -> bool:
    upgrade = get_upgrade_by_id(upgrade_id)
    if upgrade is None:
        return False
    return state.money >= upgrade.cost


def meets_prerequisites(state: GameState, upgrade: TechUpgrade) -> bool:
    """Sub-tier 1 is always open; later sub-tiers need the previous one."""
    previous = upgrade.previous_id()
    return previous is None or state.owns_upgrade(previous)


def purchase_tech_upgrade(state: GameState, upgrade_id: str) -> bool:
    """Buy an upgrade. Every check runs before any write."""
    upgrade = get_upgrade_by_id(upgrade_id)
    if upgrade is None:
        logger.warning(f"Upgrade not found: {upgrade_id}")
        return False

    if state.owns_upgrade(upgrade_id):
        logger.warning(f"Already purchased: {upgrade_id}")
        return False

    if not meets_prerequisites(state, upgrade):
        logger.warning(f"Prerequisites not met for {upgrade_id}")
        return False

    if state.money < upgrade.cost:
        return False

    state.money -= upgrade.cost
    state.purchased_upgrades.append(upgrade_id)
    apply_tech_effects(state, upgrade)

    if upgrade.tier > state.current_tech_tier:
        state.current_tech_tier = upgrade.tier

    logger.info(f"Purchased {upgrade.name} ({upgrade_id})")
    return True


def apply_tech_effects(state: GameState, upgrade: TechUpgrade) -> list:
    """
    Apply an upgrade's unlock effects. Returns the systems newly unlocked.
    Multiplier effects have no direct state write; the tier table carries them.
    """
    unlocked = []
    for effect in upgrade.effects:
        system = UNLOCK_EFFECTS.get(effect.kind)
        if system and state.unlocked_systems.unlock(system):
            unlocked.append(system)
            logger.info(f"{system} system unlocked by {upgrade.id}")
    return unlocked


# ─────────────────────────────────────────────────────
# QUERIES
# ─────────────────────────────────────────────────────

def get_available_upgrades(state: GameState) -> list:
    """Unpurchased upgrades whose prerequisites are met (affordable or not)."""
    return [u for u in ALL_TECH_UPGRADES
            if not state.owns_upgrade(u.id) and meets_prerequisites(state, u)]


def get_next_affordable_upgrade(state: GameState):
    affordable = [u for u in get_available_upgrades(state) if state.money >= u.cost]
    if not affordable:
        return None
    return min(affordable, key=lambda u: u.cost)


def get_tech_multipliers(state: GameState) -> dict:
    """
    Product of every purchased upgrade's multiplier effects.
    Display breakdown only; it can disagree with the live tier-table values.
    """
    totals = {kind: 1.0 for kind in MULTIPLIER_EFFECTS}
    for upgrade_id in state.purchased_upgrades:
        upgrade = get_upgrade_by_id(upgrade_id)
        if upgrade is None:
            continue
        for effect in upgrade.effects:
            if effect.kind in totals:
                totals[effect.kind] *= effect.value
    return {
        "speed": totals[EffectKind.GENERATION_SPEED],
        "income": totals[EffectKind.INCOME],
        "fans": totals[EffectKind.FANS],
    }


def is_tier_complete(state: GameState, tier: int) -> bool:
    return all(state.owns_upgrade(u.id) for u in get_upgrades_by_tier(tier))


def get_tier_progress(state: GameState, tier: int) -> int:
    return sum(1 for u in get_upgrades_by_tier(tier) if state.owns_upgrade(u.id))


def get_highest_unlocked_tier(state: GameState) -> int:
    highest = 1
    for upgrade_id in state.purchased_upgrades:
        upgrade = get_upgrade_by_id(upgrade_id)
        if upgrade and upgrade.tier > highest:
            highest = upgrade.tier
    return highest
