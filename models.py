"""
Music Industry Simulator: Data Models
Core data structures for the complete game state.

GameState is the single mutable root. It is owned by the GameLoop while a
run is active; subsystems receive it explicitly and mutate it in place.
All state is JSON-serializable through state_to_dict / state_from_dict,
which speak the persisted camelCase shape (currentArtist, songsInQueue...).
"""

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from catalog import STARTING_UPGRADE_ID, INITIAL_TOUR_COOLDOWN_SECONDS
from config import GAME_VERSION, STARTING_MONEY, now_ms


# ─────────────────────────────────────────────────────
# ENUMS
# ─────────────────────────────────────────────────────

class BoostType(str, Enum):
    INCOME = "income"
    FANS = "fans"
    SPEED = "speed"


# ─────────────────────────────────────────────────────
# ARTISTS
# ─────────────────────────────────────────────────────

@dataclass
class Artist:
    """The artist currently being developed. Replaced wholesale on prestige."""
    name: str = "New Artist"
    total_songs: int = 0
    fans: float = 0.0
    peak_fans: float = 0.0              # Never decreases while this artist is active


@dataclass(frozen=True)
class LegacyArtist:
    """Frozen snapshot of a prestiged artist. Earns passively."""
    name: str
    total_songs: int
    fans: float
    income_multiplier: float = 0.8
    created_at: float = 0.0             # ms timestamp


# ─────────────────────────────────────────────────────
# TEMPORARY SYSTEMS
# ─────────────────────────────────────────────────────

@dataclass
class ActiveBoost:
    """Temporary multiplier from an exploitation ability."""
    ability_id: str
    name: str
    multiplier: float
    expires_at: float                   # ms timestamp
    type: str = BoostType.INCOME.value

    def is_active(self, now: float) -> bool:
        return now < self.expires_at


@dataclass
class PhysicalAlbum:
    """A pressed batch of albums being sold off."""
    id: str
    name: str
    release_time: float
    copies_pressed: float
    copies_remaining: float             # Only decreases
    price_per_copy: float
    revenue_generated: float = 0.0      # Only increases
    press_timestamp: float = 0.0        # ms, drives demand decay


@dataclass
class Tour:
    """The single active tour. Multiplies streaming income while running."""
    id: str
    name: str
    tier: int
    start_time: float                   # ms
    end_time: float                     # ms
    duration_seconds: float
    revenue_multiplier: float
    cost: float = 0.0

    def is_running(self, now: float) -> bool:
        return now < self.end_time


@dataclass
class UnlockedSystems:
    """Feature flags. Each flips false -> true once and is never reset."""
    prestige: bool = False
    gpu: bool = False
    physical_albums: bool = False
    tours: bool = False
    platform_ownership: bool = False
    trend_research: bool = False

    def unlock(self, name: str) -> bool:
        """Set a flag. Returns True only if it was previously off."""
        if getattr(self, name):
            return False
        setattr(self, name, True)
        return True


# ─────────────────────────────────────────────────────
# GAME STATE
# ─────────────────────────────────────────────────────

@dataclass
class GameState:
    """Complete game state."""

    version: str = GAME_VERSION

    # RESOURCES
    money: float = STARTING_MONEY
    gpu: float = 0.0

    # ARTIST
    current_artist: Artist = field(default_factory=Artist)
    legacy_artists: list = field(default_factory=list)      # list of LegacyArtist, oldest first
    total_prestiges: int = 0

    # SONGS
    total_completed_songs: int = 0                          # Never decreases within a run
    songs_in_queue: int = 0
    current_song_progress: float = 0.0                      # Fraction of the current song

    # TECH
    current_tech_tier: int = 1
    purchased_upgrades: list = field(default_factory=lambda: [STARTING_UPGRADE_ID])

    # BOOSTS
    active_boosts: list = field(default_factory=list)       # list of ActiveBoost
    boost_usage: dict = field(default_factory=dict)         # ability_id -> times used

    # PHYSICAL ALBUMS
    active_album_batch: Optional[PhysicalAlbum] = None
    last_album_timestamp: float = 0.0
    total_albums_released: int = 0

    # TOURS
    active_tour: Optional[Tour] = None
    last_tour_end_time: float = 0.0
    tour_cooldown_seconds: float = INITIAL_TOUR_COOLDOWN_SECONDS
    total_tours_completed: int = 0

    # PLATFORMS
    owned_platforms: list = field(default_factory=list)

    # PROGRESSION (account-scoped, survives prestige)
    industry_control: float = 0.0
    unlocked_systems: UnlockedSystems = field(default_factory=UnlockedSystems)
    trending_genre: str = "pop"
    experience_multiplier: float = 1.0

    # META
    last_save_time: float = 0.0
    total_time_played: float = 0.0                          # seconds
    game_start_time: float = 0.0

    # ── Helpers ──

    def owns_upgrade(self, upgrade_id: str) -> bool:
        return upgrade_id in self.purchased_upgrades

    def owns_platform(self, platform_id: str) -> bool:
        return platform_id in self.owned_platforms

    def boosts_of_type(self, boost_type: str, now: float) -> list:
        return [b for b in self.active_boosts
                if b.type == boost_type and b.is_active(now)]


def create_initial_game_state(now: float = None, artist_name: str = None) -> GameState:
    """Fresh state for a new game or a hard reset."""
    if now is None:
        now = now_ms()
    state = GameState(last_save_time=now, game_start_time=now)
    if artist_name:
        state.current_artist.name = artist_name
    return state


# ─────────────────────────────────────────────────────
# SERIALIZATION
# ─────────────────────────────────────────────────────

def _boost_to_dict(b: ActiveBoost) -> dict:
    return {"abilityId": b.ability_id, "name": b.name, "multiplier": b.multiplier,
            "expiresAt": b.expires_at, "type": b.type}


def _album_to_dict(a: PhysicalAlbum) -> dict:
    return {
        "id": a.id, "name": a.name, "releaseTime": a.release_time,
        "copiesPressed": a.copies_pressed, "copiesRemaining": a.copies_remaining,
        "pricePerCopy": a.price_per_copy, "revenueGenerated": a.revenue_generated,
        "pressTimestamp": a.press_timestamp,
    }


def _tour_to_dict(t: Tour) -> dict:
    return {
        "id": t.id, "name": t.name, "tier": t.tier,
        "startTime": t.start_time, "endTime": t.end_time,
        "durationSeconds": t.duration_seconds,
        "revenueMultiplier": t.revenue_multiplier, "cost": t.cost,
    }


def state_to_dict(state: GameState) -> dict:
    """Persisted (camelCase) representation of the state."""
    artist = state.current_artist
    unlocked = state.unlocked_systems
    return {
        "version": state.version,
        "money": state.money,
        "gpu": state.gpu,
        "currentArtist": {
            "name": artist.name, "totalSongs": artist.total_songs,
            "fans": artist.fans, "peakFans": artist.peak_fans,
        },
        "legacyArtists": [
            {"name": la.name, "totalSongs": la.total_songs, "fans": la.fans,
             "incomeMultiplier": la.income_multiplier, "createdAt": la.created_at}
            for la in state.legacy_artists
        ],
        "totalPrestiges": state.total_prestiges,
        "totalCompletedSongs": state.total_completed_songs,
        "songsInQueue": state.songs_in_queue,
        "currentSongProgress": state.current_song_progress,
        "currentTechTier": state.current_tech_tier,
        "purchasedUpgrades": list(state.purchased_upgrades),
        "activeBoosts": [_boost_to_dict(b) for b in state.active_boosts],
        "boostUsage": dict(state.boost_usage),
        "activeAlbumBatch": (_album_to_dict(state.active_album_batch)
                             if state.active_album_batch else None),
        "lastAlbumTimestamp": state.last_album_timestamp,
        "totalAlbumsReleased": state.total_albums_released,
        "activeTour": _tour_to_dict(state.active_tour) if state.active_tour else None,
        "lastTourEndTime": state.last_tour_end_time,
        "tourCooldownSeconds": state.tour_cooldown_seconds,
        "totalToursCompleted": state.total_tours_completed,
        "ownedPlatforms": list(state.owned_platforms),
        "industryControl": state.industry_control,
        "unlockedSystems": {
            "prestige": unlocked.prestige,
            "gpu": unlocked.gpu,
            "physicalAlbums": unlocked.physical_albums,
            "tours": unlocked.tours,
            "platformOwnership": unlocked.platform_ownership,
            "trendResearch": unlocked.trend_research,
        },
        "trendingGenre": state.trending_genre,
        "experienceMultiplier": state.experience_multiplier,
        "lastSaveTime": state.last_save_time,
        "totalTimePlayed": state.total_time_played,
        "gameStartTime": state.game_start_time,
    }


def _as_dict(value) -> dict:
    return value if isinstance(value, dict) else {}


def _dict_items(value) -> list:
    """Dict entries of a persisted list; anything else is dropped."""
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, dict)]


def state_from_dict(data: dict) -> GameState:
    """
    Rebuild a GameState from its persisted shape.
    Missing optional keys fall back to defaults; callers validate first.
    """
    state = GameState()

    state.version = data.get("version", GAME_VERSION)
    state.money = data.get("money", state.money)
    state.gpu = data.get("gpu", 0.0)

    adata = _as_dict(data.get("currentArtist"))
    state.current_artist = Artist(
        name=adata.get("name", "New Artist"),
        total_songs=adata.get("totalSongs", 0),
        fans=adata.get("fans", 0.0),
        peak_fans=adata.get("peakFans", adata.get("fans", 0.0)),
    )

    for ldata in _dict_items(data.get("legacyArtists")):
        state.legacy_artists.append(LegacyArtist(
            name=ldata.get("name", "Unknown Artist"),
            total_songs=ldata.get("totalSongs", 0),
            fans=ldata.get("fans", 0.0),
            income_multiplier=ldata.get("incomeMultiplier", 0.8),
            created_at=ldata.get("createdAt", 0.0),
        ))
    state.total_prestiges = data.get("totalPrestiges", 0)

    state.total_completed_songs = data.get("totalCompletedSongs", 0)
    state.songs_in_queue = data.get("songsInQueue", 0)
    state.current_song_progress = data.get("currentSongProgress", 0.0)

    state.current_tech_tier = data.get("currentTechTier", 1)
    state.purchased_upgrades = list(data.get("purchasedUpgrades", [STARTING_UPGRADE_ID]))

    for bdata in _dict_items(data.get("activeBoosts")):
        if "abilityId" not in bdata:
            continue
        state.active_boosts.append(ActiveBoost(
            ability_id=bdata["abilityId"],
            name=bdata.get("name", bdata["abilityId"]),
            multiplier=bdata.get("multiplier", 1.0),
            expires_at=bdata.get("expiresAt", 0.0),
            type=bdata.get("type", BoostType.INCOME.value),
        ))
    state.boost_usage = dict(_as_dict(data.get("boostUsage")))

    album = _as_dict(data.get("activeAlbumBatch"))
    if album:
        state.active_album_batch = PhysicalAlbum(
            id=album.get("id", ""),
            name=album.get("name", ""),
            release_time=album.get("releaseTime", 0.0),
            copies_pressed=album.get("copiesPressed", 0),
            copies_remaining=album.get("copiesRemaining", 0),
            price_per_copy=album.get("pricePerCopy", 0.0),
            revenue_generated=album.get("revenueGenerated", 0.0),
            press_timestamp=album.get("pressTimestamp", 0.0),
        )
    state.last_album_timestamp = data.get("lastAlbumTimestamp", 0.0)
    state.total_albums_released = data.get("totalAlbumsReleased", 0)

    tour = _as_dict(data.get("activeTour"))
    if tour:
        state.active_tour = Tour(
            id=tour.get("id", ""),
            name=tour.get("name", ""),
            tier=tour.get("tier", 1),
            start_time=tour.get("startTime", 0.0),
            end_time=tour.get("endTime", 0.0),
            duration_seconds=tour.get("durationSeconds", 0.0),
            revenue_multiplier=tour.get("revenueMultiplier", 1.0),
            cost=tour.get("cost", 0.0),
        )
    state.last_tour_end_time = data.get("lastTourEndTime", 0.0)
    state.tour_cooldown_seconds = data.get("tourCooldownSeconds",
                                           INITIAL_TOUR_COOLDOWN_SECONDS)
    state.total_tours_completed = data.get("totalToursCompleted", 0)

    state.owned_platforms = list(data.get("ownedPlatforms", []))
    state.industry_control = data.get("industryControl", 0.0)

    udata = _as_dict(data.get("unlockedSystems"))
    state.unlocked_systems = UnlockedSystems(
        prestige=udata.get("prestige", False),
        gpu=udata.get("gpu", False),
        physical_albums=udata.get("physicalAlbums", False),
        tours=udata.get("tours", False),
        platform_ownership=udata.get("platformOwnership", False),
        trend_research=udata.get("trendResearch", False),
    )
    state.trending_genre = data.get("trendingGenre", "pop")
    state.experience_multiplier = data.get("experienceMultiplier", 1.0)

    state.last_save_time = data.get("lastSaveTime", 0.0)
    state.total_time_played = data.get("totalTimePlayed", 0.0)
    state.game_start_time = data.get("gameStartTime", 0.0)

    return state


def state_to_json(state: GameState) -> str:
    """Serialize complete game state to JSON."""
    return json.dumps(state_to_dict(state), indent=2, ensure_ascii=False)


def state_from_json(json_str: str) -> GameState:
    """Deserialize game state from JSON."""
    return state_from_dict(json.loads(json_str))
