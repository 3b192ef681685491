"""
Music Industry Simulator: Tick Engine
One tick advances every subsystem by delta_time seconds, in a fixed order:

1. Time played
2. Song queue (may complete songs)
3. Income (streaming x tour x boosts, plus legacy and platform yield)
4. Fans (main rate plus legacy cross-promotion)
5. Album sales
6. Tour expiry
7. Boost expiry
8. Milestone unlocks

Income and fans read the song total the queue step just produced, and the
tech tier as it stands at the start of the tick. Order matters; the
pipeline below is the single place that defines it.
"""

from models import GameState
from config import now_ms, TICK_RATE
from songs import process_song_queue
from income import generate_income
from fans import generate_fans
from albums import process_album_sales
from tours import process_tour
from boosts import process_active_boosts
from unlocks import check_unlocks
from platforms import has_won


# ─────────────────────────────────────────────────────
# PIPELINE STEPS
# ─────────────────────────────────────────────────────
# Each step takes (state, delta_time, now) and returns a JSON-ready result.

def _step_time_played(state: GameState, delta_time: float, now: float):
    state.total_time_played += delta_time
    return {"total": state.total_time_played}


def _step_songs(state: GameState, delta_time: float, now: float):
    return {"completed": process_song_queue(state, delta_time, now)}


def _step_income(state: GameState, delta_time: float, now: float):
    return {"earned": generate_income(state, delta_time, now)}


def _step_fans(state: GameState, delta_time: float, now: float):
    return {"gained": generate_fans(state, delta_time, now)}


def _step_albums(state: GameState, delta_time: float, now: float):
    return {"revenue": process_album_sales(state, delta_time, now)}


def _step_tours(state: GameState, delta_time: float, now: float):
    return {"ended": process_tour(state, now)}


def _step_boosts(state: GameState, delta_time: float, now: float):
    return {"expired": process_active_boosts(state, now)}


def _step_unlocks(state: GameState, delta_time: float, now: float):
    return {"unlocked": check_unlocks(state)}


TICK_PIPELINE = (
    ("time_played", _step_time_played),
    ("songs", _step_songs),
    ("income", _step_income),
    ("fans", _step_fans),
    ("albums", _step_albums),
    ("tours", _step_tours),
    ("boosts", _step_boosts),
    ("unlocks", _step_unlocks),
)


# ─────────────────────────────────────────────────────
# TICK
# ─────────────────────────────────────────────────────

def run_tick(state: GameState, delta_time: float, now: float = None) -> dict:
    """
    Execute one complete tick.
    Returns an audit log of what every pipeline step did.
    A negative delta_time (clock regression) is treated as zero.
    """
    if now is None:
        now = now_ms()
    delta_time = max(0.0, delta_time)

    tick_log = {
        "delta_time": delta_time,
        "steps": [],
        "unlocked": [],
        "won": False,
    }

    for name, step in TICK_PIPELINE:
        result = step(state, delta_time, now)
        tick_log["steps"].append({"step": name, "result": result})
        if name == "unlocks":
            tick_log["unlocked"] = result["unlocked"]

    tick_log["won"] = has_won(state)
    return tick_log


def run_ticks(state: GameState, seconds: float, tick_rate: float = TICK_RATE,
              now: float = None) -> list:
    """
    Headless fixed-step simulation. Advances simulated wall time together
    with delta_time so tours and boosts expire on schedule.
    Returns the list of tick logs.
    """
    if now is None:
        now = now_ms()
    if tick_rate <= 0:
        return []

    full_ticks = int(seconds // tick_rate)
    steps = [tick_rate] * full_ticks
    remainder = seconds - full_ticks * tick_rate
    if remainder > 1e-9:
        steps.append(remainder)

    all_logs = []
    for step in steps:
        now += step * 1000
        all_logs.append(run_tick(state, step, now))

    return all_logs
