"""
Music Industry Simulator: Name Generator
Random artist, album and tour names. Callers that need determinism pass
their own name provider instead.
"""

import random

ADJECTIVES = ["Electric", "Velvet", "Neon", "Hollow", "Golden", "Static",
              "Midnight", "Broken", "Silent", "Crimson", "Digital", "Wild"]
NOUNS = ["Echo", "Machine", "Horizon", "Signal", "Ghost", "Engine",
         "Lantern", "Circuit", "Tide", "Mirror", "Comet", "Anthem"]
PLACES = ["Tokyo", "Berlin", "Nashville", "Lagos", "the Valley", "the Coast",
          "Downtown", "the Moon", "Brooklyn", "Seoul"]


def _pick(words: list, rng: random.Random = None) -> str:
    return (rng or random).choice(words)


def generate_artist_name(rng: random.Random = None) -> str:
    patterns = (
        lambda: f"{_pick(ADJECTIVES, rng)} {_pick(NOUNS, rng)}",
        lambda: f"The {_pick(NOUNS, rng)}s",
        lambda: f"{_pick(NOUNS, rng)} of {_pick(PLACES, rng)}",
    )
    return _pick(patterns, rng)()


def generate_album_name(rng: random.Random = None) -> str:
    return f"{_pick(ADJECTIVES, rng)} {_pick(NOUNS, rng)}"


def generate_tour_name(rng: random.Random = None) -> str:
    return f"{_pick(NOUNS, rng)} Over {_pick(PLACES, rng)} Tour"
