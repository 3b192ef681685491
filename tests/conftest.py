import pytest

from models import create_initial_game_state, LegacyArtist

NOW = 1_700_000_000_000.0


@pytest.fixture
def now() -> float:
    return NOW


@pytest.fixture
def state(now):
    """Fresh game, fixed clock, deterministic artist name."""
    return create_initial_game_state(now=now, artist_name="Test Artist")


@pytest.fixture
def legacy_artist():
    def make(name="Old Act", total_songs=100, fans=1000.0):
        return LegacyArtist(name=name, total_songs=total_songs, fans=fans,
                            income_multiplier=0.8, created_at=NOW)
    return make
