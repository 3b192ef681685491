"""
Music Industry Simulator: Milestone Unlocks
Opens physical albums, tours and platform ownership once the run reaches
the catalog's requirements. Flags only ever go from off to on.
"""

import logging

from models import GameState
from catalog import UNLOCK_REQUIREMENTS

logger = logging.getLogger("mis.unlocks")


def _requirements_met(state: GameState, req: dict) -> bool:
    if state.total_completed_songs < req.get("songs", 0):
        return False
    if state.current_artist.fans < req.get("fans", 0):
        return False
    if state.total_albums_released < req.get("albums", 0):
        return False
    if state.total_tours_completed < req.get("tours", 0):
        return False
    if state.current_tech_tier < req.get("tech_tier", 0):
        return False
    return True


def check_unlocks(state: GameState) -> list:
    """Flip every milestone flag whose requirements now hold. Returns the new ones."""
    newly = []
    for system, req in UNLOCK_REQUIREMENTS.items():
        if getattr(state.unlocked_systems, system):
            continue
        if _requirements_met(state, req) and state.unlocked_systems.unlock(system):
            newly.append(system)
            logger.info(f"Milestone reached: {system} unlocked")
    return newly
