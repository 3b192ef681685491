import json
import time

import pytest

from game_loop import GameLoop


class FakeClock:
    """Monotonic clock the test advances by hand."""

    def __init__(self):
        self.t = 0.0

    def __call__(self) -> float:
        return self.t


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def saves():
    return []


@pytest.fixture
def loop(state, now, clock, saves):
    def save(s):
        saves.append(s.money)
        return True

    return GameLoop(state, save_callback=save, clock=clock,
                    wall_clock=lambda: now + clock.t * 1000,
                    auto_save_interval=10)


def test_tick_uses_clock_delta(loop, clock):
    loop.state.songs_in_queue = 2
    loop.tick()                     # first tick establishes the baseline
    clock.t = 35.0
    tick_log = loop.tick()
    assert tick_log["delta_time"] == pytest.approx(35.0)
    assert loop.state.total_completed_songs == 1


def test_clock_regression_yields_zero_delta(loop, clock):
    clock.t = 10.0
    loop.tick()
    clock.t = 5.0
    assert loop.tick()["delta_time"] == 0


def test_auto_save_interval(loop, clock, saves):
    loop.tick()
    clock.t = 5.0
    loop.tick()
    assert saves == []
    clock.t = 10.0
    loop.tick()
    assert len(saves) == 1
    clock.t = 15.0
    loop.tick()
    assert len(saves) == 1


def test_failing_save_does_not_break_tick(state, now, clock):
    def explode(s):
        raise OSError("disk full")

    loop = GameLoop(state, save_callback=explode, clock=clock,
                    wall_clock=lambda: now, auto_save_interval=1)
    loop.tick()
    clock.t = 2.0
    tick_log = loop.tick()
    assert tick_log["delta_time"] == 2.0
    assert loop.save() == {"success": False, "error": "Save failed"}


def test_victory_fires_once(loop, clock):
    victories = []
    loop.on_victory = victories.append
    loop.state.industry_control = 100

    loop.tick()
    clock.t = 1.0
    loop.tick()

    assert len(victories) == 1
    assert any(e["type"] == "VICTORY" for e in loop.action_log)


def test_on_tick_callback(loop):
    logs = []
    loop.on_tick = logs.append
    loop.tick()
    assert len(logs) == 1


def test_raising_callbacks_do_not_break_tick(loop, clock):
    def explode(*args):
        raise RuntimeError("listener gone")

    loop.on_tick = explode
    loop.on_victory = explode
    loop.on_log_entry = explode
    loop.state.industry_control = 100

    loop.tick()
    clock.t = 1.0
    tick_log = loop.tick()

    assert tick_log["delta_time"] == 1.0
    assert loop.victory_announced
    assert any(e["type"] == "VICTORY" for e in loop.action_log)


def test_thread_survives_raising_on_tick(state, now):
    ticks = []

    def on_tick(tick_log):
        ticks.append(tick_log)
        raise RuntimeError("listener gone")

    loop = GameLoop(state, wall_clock=lambda: now, tick_rate=0.01)
    loop.on_tick = on_tick
    loop.start()
    try:
        time.sleep(0.2)
        assert loop._thread.is_alive()
        assert len(ticks) > 1
    finally:
        loop.stop()
    assert not loop.is_running


def test_start_and_stop(state, now, saves):
    def save(s):
        saves.append(s.money)
        return True

    loop = GameLoop(state, save_callback=save, wall_clock=lambda: now, tick_rate=0.01)
    loop.start()
    loop.start()                # second start is ignored
    assert loop.is_running
    time.sleep(0.05)

    loop.stop()
    assert not loop.is_running
    assert len(saves) == 1

    loop.stop()                 # idempotent, no second save
    assert len(saves) == 1


def test_stop_without_start_is_noop(loop, saves):
    loop.stop()
    assert saves == []


def test_queue_songs_action(loop):
    result = loop.queue_songs(3)
    assert result["success"]
    assert result["songs_in_queue"] == 3
    assert loop.state.money == 7
    assert loop.action_log[-1]["type"] == "SONGS"

    result = loop.queue_songs(100)
    assert not result["success"]
    assert "Cannot afford" in result["error"]

    assert not loop.queue_songs(0)["success"]


def test_purchase_upgrade_action(loop):
    loop.state.money = 10_000
    result = loop.purchase_upgrade("tech_1_3")
    assert not result["success"]
    assert "requires tech_1_2" in result["error"]

    assert loop.purchase_upgrade("tech_1_2")["success"]
    assert not loop.purchase_upgrade("tech_1_2")["success"]
    assert not loop.purchase_upgrade("bogus")["success"]


def test_prestige_action(loop):
    assert loop.perform_prestige() == {"success": False, "error": "Prestige is not unlocked"}
    loop.state.unlocked_systems.prestige = True
    result = loop.perform_prestige()
    assert result["success"]
    assert result["total_prestiges"] == 1


def test_feature_actions_report_locks(loop):
    assert "not unlocked" in loop.press_album(10, 15)["error"]
    assert "not unlocked" in loop.start_tour(1)["error"]
    assert "Unknown tour tier" in loop.start_tour(99)["error"]
    assert "Unknown ability" in loop.activate_boost("x")["error"]
    assert "Unknown platform" in loop.purchase_platform("x")["error"]


def test_tour_action_reports_cooldown(loop, clock):
    loop.state.unlocked_systems.tours = True
    loop.state.money = 5000
    assert loop.start_tour(1)["success"]
    assert "already running" in loop.start_tour(1)["error"]

    loop.tick()
    clock.t = 31.0
    loop.tick()
    assert loop.state.active_tour is None
    assert "cooldown" in loop.start_tour(1)["error"]


def test_boost_and_platform_actions(loop):
    loop.state.money = 200_000
    result = loop.activate_boost("bot_streams")
    assert result == {"success": True, "ability_id": "bot_streams", "cost": 100}
    assert loop.purchase_platform("platform_spotify")["success"]
    assert "already owned" in loop.purchase_platform("platform_spotify")["error"]


def test_log_entry_callback(loop):
    entries = []
    loop.on_log_entry = entries.append
    loop.queue_songs(1)
    assert entries and entries[0]["type"] == "SONGS"


def test_full_state_is_json_ready(loop):
    loop.state.money = 10_000
    loop.activate_boost("bot_streams")
    full = loop.get_full_state()

    json.dumps(full)
    assert full["state"]["money"] == 9900
    assert full["derived"]["generation_time"] == 30
    assert full["derived"]["active_boosts"][0]["ability_id"] == "bot_streams"
    assert full["derived"]["victory"] is False
