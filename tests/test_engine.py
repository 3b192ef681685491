import pytest

from models import ActiveBoost
from engine import TICK_PIPELINE, run_tick, run_ticks
from songs import queue_songs
from tours import start_tour


def test_pipeline_order():
    assert [name for name, _ in TICK_PIPELINE] == [
        "time_played", "songs", "income", "fans",
        "albums", "tours", "boosts", "unlocks",
    ]


def test_tick_log_records_every_step(state, now):
    tick_log = run_tick(state, 0.1, now)
    assert tick_log["delta_time"] == 0.1
    assert [s["step"] for s in tick_log["steps"]] == [n for n, _ in TICK_PIPELINE]
    assert tick_log["unlocked"] == []
    assert tick_log["won"] is False


def test_negative_delta_is_clamped(state, now):
    state.songs_in_queue = 1
    tick_log = run_tick(state, -5, now)
    assert tick_log["delta_time"] == 0
    assert state.total_time_played == 0
    assert state.current_song_progress == 0


def test_tick_completes_songs(state, now):
    state.songs_in_queue = 2
    run_tick(state, 35, now)
    assert state.total_completed_songs == 1
    assert state.songs_in_queue == 1
    assert state.current_song_progress == pytest.approx(5 / 30)
    assert state.total_time_played == 35


def test_income_reads_songs_completed_this_tick(state, now):
    queue_songs(state, 1)               # money 9
    state.current_artist.fans = 100

    run_tick(state, 30, now)

    assert state.total_completed_songs == 1
    assert state.money == pytest.approx(9 + 1 * 100 * 0.001 * 30)


def test_expired_boost_is_ignored_and_dropped(state, now):
    state.total_completed_songs = 10
    state.current_artist.fans = 100
    state.active_boosts = [ActiveBoost("bot_streams", "Bots", 10.0, now - 1, "income")]

    run_tick(state, 1, now)

    assert state.money == pytest.approx(11.0)
    assert state.active_boosts == []


def test_unlocks_show_up_in_tick_log(state, now):
    state.total_completed_songs = 10
    state.current_artist.fans = 100
    tick_log = run_tick(state, 0.1, now)
    assert tick_log["unlocked"] == ["physical_albums"]


def test_won_flag(state, now):
    state.industry_control = 100
    assert run_tick(state, 0.1, now)["won"] is True


def test_song_total_never_decreases_across_ticks(state, now):
    state.current_tech_tier = 2
    queue_songs(state, 20)
    seen = []
    for i in range(50):
        run_tick(state, 7, now + i * 7000)
        seen.append(state.total_completed_songs)
    assert seen == sorted(seen)
    assert seen[-1] == 20


def test_run_ticks_covers_requested_time(state, now):
    logs = run_ticks(state, 1.0, 0.1, now)
    assert len(logs) == 10
    assert state.total_time_played == pytest.approx(1.0)


def test_run_ticks_advances_wall_time_for_tours(state, now):
    state.unlocked_systems.tours = True
    state.money = 1000
    start_tour(state, 1, now, lambda: "Road Test")

    run_ticks(state, 31, 1.0, now)

    assert state.active_tour is None
    assert state.total_tours_completed == 1


def test_run_ticks_rejects_bad_rate(state, now):
    assert run_ticks(state, 10, 0, now) == []
