"""
Music Industry Simulator: Tours
One tour at a time. A running tour multiplies streaming income; when it
ends it writes a cooldown window that gates the next tour.
"""

import logging
import uuid

from models import GameState, Tour
from catalog import get_tour_tier
from config import now_ms, seconds_to_ms
from names import generate_tour_name

logger = logging.getLogger("mis.tours")


def is_tour_on_cooldown(state: GameState, now: float = None) -> bool:
    if not state.last_tour_end_time:
        return False
    if now is None:
        now = now_ms()
    since_end = (now - state.last_tour_end_time) / 1000
    return since_end < state.tour_cooldown_seconds


def get_tour_cooldown_remaining(state: GameState, now: float = None) -> float:
    if now is None:
        now = now_ms()
    if not is_tour_on_cooldown(state, now):
        return 0.0
    since_end = (now - state.last_tour_end_time) / 1000
    return max(0.0, state.tour_cooldown_seconds - since_end)


def can_start_tour(state: GameState, tier: int, now: float = None) -> bool:
    if not state.unlocked_systems.tours:
        return False
    if state.active_tour is not None:
        return False
    if is_tour_on_cooldown(state, now):
        return False
    tour_tier = get_tour_tier(tier)
    if tour_tier is None:
        return False
    return state.money >= tour_tier.cost


def start_tour(state: GameState, tier: int, now: float = None, name_provider=None) -> bool:
    if now is None:
        now = now_ms()
    if not can_start_tour(state, tier, now):
        logger.warning(f"Cannot start tour tier {tier}")
        return False

    tour_tier = get_tour_tier(tier)
    state.money -= tour_tier.cost
    state.active_tour = Tour(
        id=str(uuid.uuid4()),
        name=(name_provider or generate_tour_name)(),
        tier=tier,
        start_time=now,
        end_time=now + seconds_to_ms(tour_tier.duration_seconds),
        duration_seconds=tour_tier.duration_seconds,
        revenue_multiplier=tour_tier.revenue_multiplier,
        cost=tour_tier.cost,
    )

    logger.info(f"Started {state.active_tour.name} ({tour_tier.name}): "
                f"{tour_tier.revenue_multiplier}x for {tour_tier.duration_seconds}s")
    return True


def process_tour(state: GameState, now: float = None) -> bool:
    """End the active tour once its end time has passed. Returns True if it ended."""
    tour = state.active_tour
    if tour is None:
        return False
    if now is None:
        now = now_ms()
    if tour.is_running(now):
        return False

    tour_tier = get_tour_tier(tour.tier)
    if tour_tier:
        state.tour_cooldown_seconds = tour_tier.cooldown_seconds
    state.last_tour_end_time = now
    state.active_tour = None
    state.total_tours_completed += 1

    logger.info(f"{tour.name} ended")
    return True


def get_tour_remaining_time(state: GameState, now: float = None) -> float:
    if state.active_tour is None:
        return 0.0
    if now is None:
        now = now_ms()
    return max(0.0, (state.active_tour.end_time - now) / 1000)


def get_tour_status(state: GameState, now: float = None):
    if now is None:
        now = now_ms()
    tour = state.active_tour
    if tour:
        remaining = get_tour_remaining_time(state, now)
        return f"{tour.name} - {remaining:.0f}s remaining ({tour.revenue_multiplier}x revenue)"
    if is_tour_on_cooldown(state, now):
        return f"Cooldown: {get_tour_cooldown_remaining(state, now):.0f}s"
    return None


def calculate_tour_roi(tier: int, income_per_second: float) -> float:
    """Extra income a tour would earn at the given rate, minus its cost."""
    tour_tier = get_tour_tier(tier)
    if tour_tier is None:
        return 0.0
    base = income_per_second * tour_tier.duration_seconds
    return base * (tour_tier.revenue_multiplier - 1) - tour_tier.cost
