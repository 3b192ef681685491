"""
Music Industry Simulator: Physical Albums
Press a batch of copies, then sell it off over time.

Demand decays exponentially with album age; bigger fanbases sell faster
(log10 bonus). At most one batch is active; pressing a new one discards
the unsold copies of the old batch without refund.
"""

import logging
import math
import uuid

from models import GameState, PhysicalAlbum
from config import (now_ms, BASE_PRESS_COST, BASE_COPIES, BASE_PRICE_PER_COPY,
                    BASE_SELL_RATE, DEMAND_DECAY_RATE, FAN_SALES_BONUS)
from formatting import clamp
from names import generate_album_name

logger = logging.getLogger("mis.albums")


# ─────────────────────────────────────────────────────
# PRESSING
# ─────────────────────────────────────────────────────

def calculate_press_cost(copies: float) -> float:
    return copies * BASE_PRESS_COST


def can_press_album(state: GameState, copies: float = BASE_COPIES) -> bool:
    if not state.unlocked_systems.physical_albums:
        return False
    if copies <= 0:
        return False
    return state.money >= calculate_press_cost(copies)


def press_album(state: GameState, copies: float = BASE_COPIES,
                price_per_copy: float = BASE_PRICE_PER_COPY,
                now: float = None, name_provider=None) -> bool:
    """Press a new batch, replacing any active one."""
    if price_per_copy < 0 or not can_press_album(state, copies):
        logger.warning(f"Cannot press album ({copies} copies @ ${price_per_copy})")
        return False
    if now is None:
        now = now_ms()

    state.money -= calculate_press_cost(copies)

    album = PhysicalAlbum(
        id=str(uuid.uuid4()),
        name=(name_provider or generate_album_name)(),
        release_time=now,
        copies_pressed=copies,
        copies_remaining=copies,
        price_per_copy=price_per_copy,
        revenue_generated=0.0,
        press_timestamp=now,
    )
    state.active_album_batch = album
    state.last_album_timestamp = now
    state.total_albums_released += 1

    logger.info(f"Pressed {album.name}: {copies} copies @ ${price_per_copy}")
    return True


# ─────────────────────────────────────────────────────
# SALES
# ─────────────────────────────────────────────────────

def calculate_demand(album: PhysicalAlbum, now: float = None) -> float:
    """exp(-DEMAND_DECAY_RATE * age_seconds), clamped to [0, 1]."""
    if now is None:
        now = now_ms()
    age_seconds = (now - album.press_timestamp) / 1000
    return clamp(math.exp(-DEMAND_DECAY_RATE * age_seconds), 0.0, 1.0)


def calculate_sell_rate(state: GameState, album: PhysicalAlbum, now: float = None) -> float:
    """Copies per second."""
    fan_bonus = 1 + math.log10(max(1, state.current_artist.fans)) * FAN_SALES_BONUS
    return BASE_SELL_RATE * calculate_demand(album, now) * fan_bonus


def process_album_sales(state: GameState, delta_time: float, now: float = None) -> float:
    """Sell copies for this tick. Returns revenue earned."""
    album = state.active_album_batch
    if album is None:
        return 0.0

    if album.copies_remaining <= 0:
        state.active_album_batch = None
        return 0.0

    sold = min(album.copies_remaining, calculate_sell_rate(state, album, now) * delta_time)
    revenue = sold * album.price_per_copy

    state.money += revenue
    album.copies_remaining -= sold
    album.revenue_generated += revenue

    if album.copies_remaining <= 0:
        logger.info(f"{album.name} sold out. Revenue: ${album.revenue_generated:.2f}")
        state.active_album_batch = None

    return revenue


# ─────────────────────────────────────────────────────
# QUERIES
# ─────────────────────────────────────────────────────

def calculate_potential_revenue(copies: float, price_per_copy: float) -> float:
    return copies * price_per_copy


def calculate_net_profit(copies: float, price_per_copy: float) -> float:
    return calculate_potential_revenue(copies, price_per_copy) - calculate_press_cost(copies)


def get_album_status(state: GameState, now: float = None):
    album = state.active_album_batch
    if album is None:
        return None
    sold = album.copies_pressed - album.copies_remaining
    pct = sold / album.copies_pressed * 100 if album.copies_pressed else 0.0
    demand = calculate_demand(album, now)
    return (f"{album.name}: {sold:.0f}/{album.copies_pressed:.0f} sold ({pct:.0f}%) "
            f"- Demand: {demand * 100:.0f}%")
