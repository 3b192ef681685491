"""
Music Industry Simulator: Save Validation
Structural and range checks on a persisted (camelCase) state dict before it
is accepted as authoritative. Failures are logged, never raised.
"""

import logging
import math

logger = logging.getLogger("mis.validation")


REQUIRED_FIELDS = (
    "version",
    "money",
    "currentArtist",
    "totalCompletedSongs",
    "songsInQueue",
    "currentTechTier",
    "purchasedUpgrades",
    "legacyArtists",
    "industryControl",
    "unlockedSystems",
)


def _is_number(value) -> bool:
    # bool is an int subclass; a flag is never a valid quantity
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_finite_number(value) -> bool:
    return _is_number(value) and math.isfinite(value)


def _fail(reason: str) -> bool:
    logger.warning(f"Invalid save: {reason}")
    return False


def validate_save(data) -> bool:
    """True iff the dict satisfies the save contract."""
    if not isinstance(data, dict):
        return _fail("not an object")

    for key in REQUIRED_FIELDS:
        if key not in data:
            return _fail(f"missing field '{key}'")

    artist = data["currentArtist"]
    if not isinstance(artist, dict):
        return _fail("currentArtist is not an object")
    if not isinstance(artist.get("name"), str):
        return _fail("currentArtist.name is not a string")
    if not _is_finite_number(artist.get("totalSongs")):
        return _fail("currentArtist.totalSongs is not a number")
    if not _is_finite_number(artist.get("fans")):
        return _fail("currentArtist.fans is not a number")

    queue = data["songsInQueue"]
    if not _is_finite_number(queue) or queue < 0:
        return _fail("songsInQueue must be a non-negative number")

    if not isinstance(data["purchasedUpgrades"], list):
        return _fail("purchasedUpgrades is not an array")
    if not isinstance(data["legacyArtists"], list):
        return _fail("legacyArtists is not an array")

    money = data["money"]
    if not _is_finite_number(money) or money < 0:
        return _fail("money must be finite and >= 0")

    control = data["industryControl"]
    if not _is_finite_number(control) or not 0 <= control <= 100:
        return _fail("industryControl must be finite and within [0, 100]")

    return True
