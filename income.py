"""
Music Industry Simulator: Income
Money generation per tick.

Streaming revenue is strictly linear in songs and fans:
    songs * fans * BASE_STREAMING_RATE * platform * tech * experience
then scaled by the active tour and active income boosts. Legacy artists and
owned platforms add their own independent linear contributions.
"""

import math

from models import GameState, BoostType
from catalog import get_platform_by_id
from config import (get_tech_tier, now_ms, BASE_STREAMING_RATE,
                    LEGACY_INCOME_DIVISOR, PLATFORM_PASSIVE_YIELD)
from platforms import get_platform_income_multiplier


# ─────────────────────────────────────────────────────
# MULTIPLIER SOURCES
# ─────────────────────────────────────────────────────

def calculate_platform_multiplier(state: GameState) -> float:
    """Product of every owned platform's income multiplier (1.0 with none)."""
    return get_platform_income_multiplier(state)


def get_tour_multiplier(state: GameState, now: float = None) -> float:
    """Active, unexpired tour's revenue multiplier, else 1.0."""
    if now is None:
        now = now_ms()
    tour = state.active_tour
    if tour and tour.is_running(now):
        return tour.revenue_multiplier
    return 1.0


def get_boost_multiplier(state: GameState, boost_type: str, now: float = None) -> float:
    """Product of unexpired boosts of one type. Expired boosts never count."""
    if now is None:
        now = now_ms()
    return math.prod(b.multiplier for b in state.boosts_of_type(boost_type, now))


# ─────────────────────────────────────────────────────
# RATES ($ per second)
# ─────────────────────────────────────────────────────

def calculate_streaming_income(state: GameState) -> float:
    tier = get_tech_tier(state.current_tech_tier)
    base = state.total_completed_songs * state.current_artist.fans * BASE_STREAMING_RATE
    return (base
            * calculate_platform_multiplier(state)
            * tier["income_multiplier"]
            * state.experience_multiplier)


def calculate_total_income(state: GameState, now: float = None) -> float:
    """Streaming rate with tour and income-boost multipliers applied."""
    if now is None:
        now = now_ms()
    income = calculate_streaming_income(state)
    income *= get_tour_multiplier(state, now)
    income *= get_boost_multiplier(state, BoostType.INCOME.value, now)
    return income


def calculate_legacy_income(state: GameState) -> float:
    """Passive income from legacy artists: songs * fans / 100 * their multiplier."""
    total = 0.0
    for legacy in state.legacy_artists:
        base = legacy.total_songs * legacy.fans / LEGACY_INCOME_DIVISOR
        total += base * legacy.income_multiplier
    return total


def calculate_platform_income(state: GameState) -> float:
    """Passive income from owned platforms, a fixed yield on their cost."""
    total = 0.0
    for platform_id in state.owned_platforms:
        platform = get_platform_by_id(platform_id)
        if platform:
            total += platform.cost * PLATFORM_PASSIVE_YIELD
    return total


# ─────────────────────────────────────────────────────
# TICK
# ─────────────────────────────────────────────────────

def generate_income(state: GameState, delta_time: float, now: float = None) -> float:
    """Integrate every income source over delta_time. Returns money added."""
    if now is None:
        now = now_ms()
    rate = (calculate_total_income(state, now)
            + calculate_legacy_income(state)
            + calculate_platform_income(state))
    earned = rate * delta_time
    state.money += earned
    return earned


def get_income_breakdown(state: GameState, now: float = None) -> dict:
    """Per-source rates for status display."""
    if now is None:
        now = now_ms()
    streaming = calculate_total_income(state, now)
    legacy = calculate_legacy_income(state)
    platforms = calculate_platform_income(state)
    total = streaming + legacy + platforms
    return {
        "streaming": streaming,
        "legacy": legacy,
        "platforms": platforms,
        "tour_multiplier": get_tour_multiplier(state, now),
        "boost_multiplier": get_boost_multiplier(state, BoostType.INCOME.value, now),
        "total": total,
        "streaming_percentage": streaming / total if total > 0 else 0.0,
    }
