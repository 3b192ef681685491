"""
Music Industry Simulator: Platform Ownership & Industry Control
Buying platforms raises industry control; reaching 100 wins the game.
"""

import logging

from models import GameState
from catalog import ALL_PLATFORMS, get_platform_by_id
from config import WIN_CONTROL_THRESHOLD

logger = logging.getLogger("mis.platforms")


def can_purchase_platform(state: GameState, platform_id: str) -> bool:
    platform = get_platform_by_id(platform_id)
    if platform is None:
        return False
    if state.owns_platform(platform_id):
        return False
    return state.money >= platform.cost


def purchase_platform(state: GameState, platform_id: str) -> bool:
    """
    Buy a platform. Control is added without a cap here; the catalog's
    contributions sum to exactly 100, which is the win threshold.
    """
    if not can_purchase_platform(state, platform_id):
        return False

    platform = get_platform_by_id(platform_id)
    state.money -= platform.cost
    state.owned_platforms.append(platform_id)
    state.industry_control += platform.control_contribution

    logger.info(f"Purchased {platform.name}. Industry control now {state.industry_control:.0f}%")
    return True


def get_platform_income_multiplier(state: GameState) -> float:
    multiplier = 1.0
    for platform_id in state.owned_platforms:
        platform = get_platform_by_id(platform_id)
        if platform:
            multiplier *= platform.income_multiplier
    return multiplier


def get_available_platforms(state: GameState) -> list:
    return [p for p in ALL_PLATFORMS if not state.owns_platform(p.id)]


def has_won(state: GameState) -> bool:
    return state.industry_control >= WIN_CONTROL_THRESHOLD
