"""
Music Industry Simulator: Prestige
Retire the current artist into a legacy act and start over.

Run-scoped state (artist, money, songs, queue, boosts, album, tour) is
reset. Account-scoped state (tech, unlocks, platforms, industry control)
is kept. Legacy artists are capped at MAX_LEGACY_ARTISTS, oldest evicted.
"""

import logging
import math

from models import GameState, Artist, LegacyArtist
from config import (now_ms, MAX_LEGACY_ARTISTS, LEGACY_INCOME_MULTIPLIER,
                    EXPERIENCE_MULTIPLIER_PER_PRESTIGE)
from names import generate_artist_name

logger = logging.getLogger("mis.prestige")


def can_prestige(state: GameState) -> bool:
    return state.unlocked_systems.prestige


def perform_prestige(state: GameState, now: float = None, name_provider=None) -> bool:
    """
    Archive the current artist and reset the run.
    name_provider: zero-argument callable for the new artist's name.
    """
    if not can_prestige(state):
        logger.warning("Cannot prestige: system not unlocked")
        return False
    if now is None:
        now = now_ms()

    artist = state.current_artist
    state.legacy_artists.append(LegacyArtist(
        name=artist.name,
        total_songs=artist.total_songs,
        fans=artist.fans,
        income_multiplier=LEGACY_INCOME_MULTIPLIER,
        created_at=now,
    ))
    if len(state.legacy_artists) > MAX_LEGACY_ARTISTS:
        state.legacy_artists.pop(0)

    state.total_prestiges += 1
    state.experience_multiplier = 1.0 + state.total_prestiges * EXPERIENCE_MULTIPLIER_PER_PRESTIGE

    new_name = (name_provider or generate_artist_name)()
    state.current_artist = Artist(name=new_name)

    state.money = 0.0
    state.total_completed_songs = 0
    state.songs_in_queue = 0
    state.current_song_progress = 0.0

    state.active_boosts = []
    state.active_album_batch = None
    state.active_tour = None

    logger.info(f"Prestiged {artist.name} -> {new_name}. Total prestiges: {state.total_prestiges}")
    return True


def get_prestige_bonus(state: GameState) -> str:
    if state.total_prestiges == 0:
        return "No prestige bonuses yet"
    return f"Experience: +{(state.experience_multiplier - 1) * 100:.0f}%"


def calculate_prestige_strength(state: GameState) -> float:
    """log10 of fans plus log10 of songs; higher means a stronger legacy act."""
    artist = state.current_artist
    return math.log10(max(1, artist.fans)) + math.log10(max(1, artist.total_songs))
