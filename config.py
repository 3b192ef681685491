"""
Music Industry Simulator: Game Configuration
Balance constants, tech tier table and host settings.

All tuning values live here so the subsystems read one source of truth.
Host settings (data dir, port, log level) come from the environment.
"""

import os
import time


# ─────────────────────────────────────────────────────
# CORE GAME SETTINGS
# ─────────────────────────────────────────────────────

TICKS_PER_SECOND = 10
TICK_RATE = 1.0 / TICKS_PER_SECOND      # seconds per tick
AUTO_SAVE_INTERVAL = 10                 # seconds between auto-saves
GAME_VERSION = "1.0.0"

STARTING_MONEY = 10
WIN_CONTROL_THRESHOLD = 100


# ─────────────────────────────────────────────────────
# RESOURCE RATES
# ─────────────────────────────────────────────────────

BASE_STREAMING_RATE = 0.001             # $ per fan per song per second
PLATFORM_PASSIVE_YIELD = 0.0005         # fraction of platform cost paid back per second

BASE_FAN_RATE = 0.01                    # fans per song per second
CROSS_PROMOTION_RATE = 0.001            # share of legacy fans funneled per second

MAX_FREE_QUEUE = 100                    # songs queued at once once they are free


# ─────────────────────────────────────────────────────
# PRESTIGE
# ─────────────────────────────────────────────────────

MAX_LEGACY_ARTISTS = 3
LEGACY_INCOME_MULTIPLIER = 0.8
LEGACY_INCOME_DIVISOR = 100             # legacy $/s = songs * fans / 100 * multiplier
EXPERIENCE_MULTIPLIER_PER_PRESTIGE = 0.1


# ─────────────────────────────────────────────────────
# PHYSICAL ALBUMS
# ─────────────────────────────────────────────────────

BASE_PRESS_COST = 5                     # $ per copy pressed
BASE_COPIES = 100
BASE_PRICE_PER_COPY = 15
BASE_SELL_RATE = 0.5                    # copies per second at full demand
DEMAND_DECAY_RATE = 0.5 / 3600          # per second of album age
FAN_SALES_BONUS = 0.1                   # sell rate bonus per order of magnitude of fans


# ─────────────────────────────────────────────────────
# TECH TIERS
# ─────────────────────────────────────────────────────
# Live multipliers come from the current tier's entry only.

TECH_TIERS = [
    {"tier": 1, "song_cost": 1, "generation_time": 30,
     "income_multiplier": 1.0, "fan_multiplier": 1.0},
    {"tier": 2, "song_cost": 0, "generation_time": 15,
     "income_multiplier": 1.5, "fan_multiplier": 1.2},
    {"tier": 3, "song_cost": 0, "generation_time": 5,
     "income_multiplier": 2.5, "fan_multiplier": 1.5},
    {"tier": 4, "song_cost": 0, "generation_time": 2,
     "income_multiplier": 4.0, "fan_multiplier": 2.0},
    {"tier": 5, "song_cost": 0, "generation_time": 1,
     "income_multiplier": 7.0, "fan_multiplier": 3.0},
    {"tier": 6, "song_cost": 0, "generation_time": 0.5,
     "income_multiplier": 12.0, "fan_multiplier": 4.0},
    {"tier": 7, "song_cost": 0, "generation_time": 0.1,
     "income_multiplier": 20.0, "fan_multiplier": 6.0},
]


def get_tech_tier(tier: int) -> dict:
    """Tier table entry, falling back to tier 1 for unknown tiers."""
    for entry in TECH_TIERS:
        if entry["tier"] == tier:
            return entry
    return TECH_TIERS[0]


# ─────────────────────────────────────────────────────
# HOST SETTINGS
# ─────────────────────────────────────────────────────

DATA_DIR = os.environ.get(
    "MIS_DATA_DIR",
    os.path.join(os.path.dirname(os.path.abspath(__file__)), "data"),
)
HOST = os.environ.get("MIS_HOST", "0.0.0.0")
PORT = int(os.environ.get("MIS_PORT", "8000"))
LOG_LEVEL = os.environ.get("MIS_LOG_LEVEL", "INFO")


# ─────────────────────────────────────────────────────
# TIME HELPERS
# ─────────────────────────────────────────────────────

def now_ms() -> float:
    """Wall-clock milliseconds since the epoch."""
    return time.time() * 1000


def seconds_to_ms(seconds: float) -> float:
    return seconds * 1000
