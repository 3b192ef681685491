import pytest

from models import ActiveBoost, Tour, state_from_dict, state_to_dict
from income import (calculate_streaming_income, calculate_total_income,
                    calculate_legacy_income, calculate_platform_income,
                    calculate_platform_multiplier, get_tour_multiplier,
                    generate_income, get_income_breakdown)


@pytest.fixture
def earning(state):
    state.total_completed_songs = 10
    state.current_artist.fans = 100
    return state


def _tour(now, end_offset_ms, multiplier=2.0):
    return Tour(id="t", name="Test Tour", tier=1, start_time=now,
                end_time=now + end_offset_ms, duration_seconds=30,
                revenue_multiplier=multiplier)


def _income_boost(expires_at, multiplier=1.5):
    return ActiveBoost("bot_streams", "Buy Bot Streams", multiplier, expires_at, "income")


def test_streaming_rate_is_linear_in_songs_and_fans(earning, now):
    assert calculate_streaming_income(earning) == pytest.approx(1.0)
    earning.total_completed_songs = 20
    assert calculate_streaming_income(earning) == pytest.approx(2.0)
    earning.current_artist.fans = 300
    assert calculate_streaming_income(earning) == pytest.approx(6.0)


def test_no_songs_no_streaming(state, now):
    state.current_artist.fans = 1_000_000
    assert calculate_total_income(state, now) == 0


def test_tech_tier_and_experience_scale_streaming(earning):
    earning.current_tech_tier = 3          # 2.5x
    earning.experience_multiplier = 1.2
    assert calculate_streaming_income(earning) == pytest.approx(3.0)


def test_running_tour_multiplies_income(earning, now):
    earning.active_tour = _tour(now, 10_000)
    assert get_tour_multiplier(earning, now) == 2.0
    assert calculate_total_income(earning, now) == pytest.approx(2.0)


def test_finished_tour_does_not_multiply(earning, now):
    earning.active_tour = _tour(now, -1)
    assert get_tour_multiplier(earning, now) == 1.0


def test_income_boosts_compose_multiplicatively(earning, now):
    earning.active_boosts = [_income_boost(now + 60_000), _income_boost(now + 60_000)]
    assert calculate_total_income(earning, now) == pytest.approx(2.25)


def test_expired_boost_never_counts(earning, now):
    earning.active_boosts = [_income_boost(now), _income_boost(now - 5000, 10.0)]
    assert calculate_total_income(earning, now) == pytest.approx(1.0)


def test_fan_boost_does_not_touch_income(earning, now):
    earning.active_boosts = [
        ActiveBoost("playlist_placement", "Playlist", 2.0, now + 60_000, "fans")]
    assert calculate_total_income(earning, now) == pytest.approx(1.0)


def test_legacy_income(state, legacy_artist):
    state.legacy_artists = [legacy_artist(total_songs=100, fans=1000)]
    assert calculate_legacy_income(state) == pytest.approx(800.0)


def test_platforms_multiply_streaming_and_pay_passive_yield(earning):
    earning.owned_platforms = ["platform_spotify", "platform_label"]
    assert calculate_platform_multiplier(earning) == pytest.approx(1.2 * 1.3)
    assert calculate_streaming_income(earning) == pytest.approx(1.56)
    assert calculate_platform_income(earning) == pytest.approx(300.0)


def test_generate_income_sums_all_sources(earning, now, legacy_artist):
    earning.legacy_artists = [legacy_artist(total_songs=1, fans=100)]   # 0.8/s
    earning.owned_platforms = ["platform_spotify"]                      # 50/s, 1.2x

    earned = generate_income(earning, 2.0, now)

    assert earned == pytest.approx((1.2 + 0.8 + 50) * 2)
    assert earning.money == pytest.approx(10 + earned)


def test_income_integration_splits_linearly(earning, now):
    other = state_from_dict(state_to_dict(earning))

    generate_income(earning, 3.0, now)
    generate_income(other, 1.0, now)
    generate_income(other, 2.0, now)

    assert earning.money == pytest.approx(other.money)


def test_zero_delta_earns_nothing(earning, now):
    assert generate_income(earning, 0.0, now) == 0
    assert earning.money == 10


def test_breakdown(earning, now, legacy_artist):
    earning.legacy_artists = [legacy_artist(total_songs=1, fans=100)]
    breakdown = get_income_breakdown(earning, now)
    assert breakdown["streaming"] == pytest.approx(1.0)
    assert breakdown["legacy"] == pytest.approx(0.8)
    assert breakdown["total"] == pytest.approx(1.8)
    assert breakdown["tour_multiplier"] == 1.0
