"""
Music Industry Simulator: Exploitation Boosts
Paid temporary multipliers. Any number may be active at once, including
several copies of the same ability; their multipliers compose.
Expired boosts stop counting immediately and are dropped on the next tick.
"""

import logging

from models import GameState, ActiveBoost
from catalog import get_ability_by_id
from config import now_ms, seconds_to_ms

logger = logging.getLogger("mis.boosts")


def get_ability_cost(state: GameState, ability_id: str):
    """base_cost * cost_scaling ** times_used, None for unknown abilities."""
    ability = get_ability_by_id(ability_id)
    if ability is None:
        return None
    uses = state.boost_usage.get(ability_id, 0)
    return ability.base_cost * ability.cost_scaling ** uses


def activate_boost(state: GameState, ability_id: str, now: float = None) -> bool:
    ability = get_ability_by_id(ability_id)
    if ability is None:
        logger.warning(f"Unknown ability: {ability_id}")
        return False

    cost = get_ability_cost(state, ability_id)
    if state.money < cost:
        return False
    if now is None:
        now = now_ms()

    state.money -= cost
    state.boost_usage[ability_id] = state.boost_usage.get(ability_id, 0) + 1
    state.active_boosts.append(ActiveBoost(
        ability_id=ability.id,
        name=ability.name,
        multiplier=ability.multiplier,
        expires_at=now + seconds_to_ms(ability.duration),
        type=ability.type,
    ))

    logger.info(f"Activated {ability.name}: {ability.multiplier}x {ability.type} "
                f"for {ability.duration}s (${cost:.2f})")
    return True


def process_active_boosts(state: GameState, now: float = None) -> int:
    """Drop expired boosts. Returns how many were removed."""
    if now is None:
        now = now_ms()
    before = len(state.active_boosts)
    state.active_boosts = [b for b in state.active_boosts if b.is_active(now)]
    return before - len(state.active_boosts)


def get_active_boosts(state: GameState, now: float = None) -> list:
    if now is None:
        now = now_ms()
    return [b for b in state.active_boosts if b.is_active(now)]


def get_boost_remaining_time(boost: ActiveBoost, now: float = None) -> float:
    if now is None:
        now = now_ms()
    return max(0.0, (boost.expires_at - now) / 1000)
