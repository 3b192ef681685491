"""
Music Industry Simulator: Song Queue
Queueing and per-tick generation of songs.

Songs are counters only (songs_in_queue, total_completed_songs) plus the
fractional progress of the song currently being generated. Generation time
is read from the tier table every tick, so a mid-song tier upgrade changes
the rate applied to the remaining fraction immediately.
"""

import logging
import math

from models import GameState, BoostType
from config import get_tech_tier, now_ms, MAX_FREE_QUEUE

logger = logging.getLogger("mis.songs")


# ─────────────────────────────────────────────────────
# QUEUEING
# ─────────────────────────────────────────────────────

def calculate_song_cost(state: GameState, count: int) -> float:
    """Cost of queueing `count` songs at the current tier ($1 each at tier 1, free after)."""
    return get_tech_tier(state.current_tech_tier)["song_cost"] * count


def queue_songs(state: GameState, count: int) -> bool:
    """Pay for and queue `count` songs. No mutation on failure."""
    if count <= 0:
        return False

    cost = calculate_song_cost(state, count)
    if state.money < cost:
        return False

    state.money -= cost
    state.songs_in_queue += count
    return True


def calculate_max_affordable(state: GameState) -> int:
    cost_per_song = calculate_song_cost(state, 1)
    if cost_per_song == 0:
        return MAX_FREE_QUEUE
    return int(state.money // cost_per_song)


# ─────────────────────────────────────────────────────
# GENERATION
# ─────────────────────────────────────────────────────

def get_generation_time(state: GameState, now: float = None) -> float:
    """Seconds per song at the current tier, shortened by active speed boosts."""
    if now is None:
        now = now_ms()
    base = get_tech_tier(state.current_tech_tier)["generation_time"]
    speed = math.prod(b.multiplier for b in state.boosts_of_type(BoostType.SPEED.value, now))
    return base / speed if speed > 0 else base


def process_song_queue(state: GameState, delta_time: float, now: float = None) -> int:
    """
    Advance generation by delta_time seconds. Returns songs completed this call.
    Excess progress carries into the next queued song; when the queue drains
    the progress is reset to 0.
    """
    if state.songs_in_queue <= 0:
        return 0

    generation_time = get_generation_time(state, now)
    increment = delta_time / generation_time if generation_time > 0 else 1.0
    state.current_song_progress += increment

    completed = 0
    while state.current_song_progress >= 1.0 and state.songs_in_queue > 0:
        state.total_completed_songs += 1
        state.current_artist.total_songs += 1
        state.songs_in_queue -= 1
        state.current_song_progress -= 1.0
        completed += 1

        if state.songs_in_queue == 0:
            state.current_song_progress = 0.0

    if completed:
        logger.debug(f"{completed} song(s) completed, {state.songs_in_queue} queued")
    return completed


def get_time_remaining(state: GameState, now: float = None) -> float:
    """Seconds until the current song completes, 0 if the queue is empty."""
    if state.songs_in_queue == 0:
        return 0.0
    return (1.0 - state.current_song_progress) * get_generation_time(state, now)


def get_total_queue_time(state: GameState, now: float = None) -> float:
    if state.songs_in_queue == 0:
        return 0.0
    per_song = get_generation_time(state, now)
    return get_time_remaining(state, now) + (state.songs_in_queue - 1) * per_song
