import math

import pytest

from formatting import (clamp, lerp, round_to, percentage_change, format_number,
                        format_money, format_time, format_duration,
                        format_percentage)
from names import generate_artist_name, generate_album_name, generate_tour_name


def test_math_helpers():
    assert clamp(5, 0, 3) == 3
    assert clamp(-1, 0, 3) == 0
    assert lerp(0, 10, 0.25) == 2.5
    assert round_to(3.14159, 2) == 3.14
    assert percentage_change(50, 75) == 50
    assert percentage_change(0, 5) == 100
    assert percentage_change(0, 0) == 0


@pytest.mark.parametrize("value,expected", [
    (999, "999"),
    (1234, "1.23K"),
    (2_500_000, "2.50M"),
    (7e9, "7.00B"),
    (1.5e12, "1.50T"),
    (-1234, "-1.23K"),
])
def test_format_number(value, expected):
    assert format_number(value) == expected


def test_format_money():
    assert format_money(1234) == "$1.23K"
    assert format_money(12) == "$12"
    assert format_money(-50) == "-$50"


@pytest.mark.parametrize("bad", [math.nan, math.inf, -math.inf])
def test_non_finite_formats_as_zero(bad):
    assert format_number(bad) == "0"
    assert format_money(bad) == "$0"
    assert format_percentage(bad) == "0.0%"


def test_time_formats():
    assert format_time(75) == "1:15"
    assert format_time(3725) == "1:02:05"
    assert format_duration(250) == "250ms"
    assert format_duration(12_000) == "12.0s"
    assert format_duration(5_400_000) == "1.5h"
    assert format_percentage(0.256) == "25.6%"
    assert format_percentage(40, is_decimal=False) == "40.0%"


def test_names_are_deterministic_with_a_seeded_rng():
    import random
    assert generate_artist_name(random.Random(7)) == generate_artist_name(random.Random(7))
    assert generate_album_name(random.Random(1))
    assert generate_tour_name(random.Random(1)).endswith("Tour")
