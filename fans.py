"""
Music Industry Simulator: Fan Growth
Fans grow from the song catalog, scaled by tech tier, experience and fan
boosts. Legacy artists cross-promote a small share of their own fans,
added independently of the main rate.
"""

import math

from models import GameState, BoostType
from config import get_tech_tier, now_ms, BASE_FAN_RATE, CROSS_PROMOTION_RATE
from income import get_boost_multiplier


def calculate_fan_generation(state: GameState, now: float = None) -> float:
    """Fans per second from the catalog. Zero with no completed songs."""
    if state.total_completed_songs == 0:
        return 0.0

    tier = get_tech_tier(state.current_tech_tier)
    rate = (state.total_completed_songs * BASE_FAN_RATE
            * tier["fan_multiplier"]
            * state.experience_multiplier)
    return rate * get_boost_multiplier(state, BoostType.FANS.value, now)


def calculate_legacy_fan_contribution(state: GameState) -> float:
    """Cross-promotion fans per second. Not scaled by tech or experience."""
    return sum(legacy.fans * CROSS_PROMOTION_RATE for legacy in state.legacy_artists)


def update_peak_fans(state: GameState):
    artist = state.current_artist
    if artist.fans > artist.peak_fans:
        artist.peak_fans = artist.fans


def generate_fans(state: GameState, delta_time: float, now: float = None) -> float:
    """Integrate fan growth over delta_time. Returns fans added."""
    if now is None:
        now = now_ms()
    rate = calculate_fan_generation(state, now) + calculate_legacy_fan_contribution(state)
    gained = rate * delta_time
    state.current_artist.fans += gained
    update_peak_fans(state)
    return gained


def get_time_to_reach_fans(state: GameState, target_fans: float, now: float = None) -> float:
    """Seconds until target_fans at the current rate; inf if never."""
    current = state.current_artist.fans
    if current >= target_fans:
        return 0.0
    rate = calculate_fan_generation(state, now) + calculate_legacy_fan_contribution(state)
    if rate <= 0:
        return math.inf
    return (target_fans - current) / rate
