"""
Music Industry Simulator: Game Loop
The outer loop. Owns the GameState for the duration of a run.

A daemon thread calls tick() every tick_rate seconds. Player actions arrive
from the web layer on other threads; every mutation, tick or action, runs
under one re-entrant lock so a tick is never observed half-applied.

Lifecycle:
  STOPPED  -> start() -> RUNNING
  RUNNING  -> stop()  -> STOPPED (final save)
"""

import logging
import threading
import time
from datetime import datetime

from models import GameState, state_to_dict
from config import (now_ms, TICK_RATE, AUTO_SAVE_INTERVAL, BASE_COPIES,
                    BASE_PRICE_PER_COPY)
from catalog import (ALL_ABILITIES, get_upgrade_by_id, get_platform_by_id,
                     get_ability_by_id, get_tour_tier)
from engine import run_tick
import songs
import income
import fans
import tech
import prestige
import albums
import tours
import boosts
import platforms

logger = logging.getLogger("mis.loop")

ACTION_LOG_LIMIT = 200


class GameLoop:
    """
    Fixed-rate tick driver plus the synchronous player-action surface.
    The web server interacts only with this object.
    """

    def __init__(self, state: GameState, save_callback=None,
                 clock=time.monotonic, wall_clock=now_ms,
                 tick_rate: float = TICK_RATE,
                 auto_save_interval: float = AUTO_SAVE_INTERVAL):
        self.state = state
        self.save_callback = save_callback      # (GameState) -> bool
        self.clock = clock                      # monotonic seconds, for delta time
        self.wall_clock = wall_clock            # epoch ms, for expiry timestamps
        self.tick_rate = tick_rate
        self.auto_save_interval = auto_save_interval

        self.action_log: list[dict] = []
        self.last_tick_log: dict = None
        self.victory_announced = platforms.has_won(state)

        self._lock = threading.RLock()
        self._stop_event = threading.Event()
        self._thread: threading.Thread = None
        self._running = False
        self._last_tick_time: float = None
        self._time_since_save = 0.0

        # Callbacks: the web layer registers these to push updates
        self.on_tick = None             # (tick_log) -> None
        self.on_log_entry = None        # (entry) -> None
        self.on_victory = None          # (state) -> None

    # ─────────────────────────────────────────────────
    # LIFECYCLE
    # ─────────────────────────────────────────────────

    @property
    def is_running(self) -> bool:
        return self._running

    def start(self):
        """Begin ticking on a background thread. No-op if already running."""
        with self._lock:
            if self._running:
                logger.info("Game loop already running")
                return
            self._running = True
            self._stop_event.clear()
            self._last_tick_time = self.clock()
            self._time_since_save = 0.0

        self._thread = threading.Thread(target=self._run, name="mis-game-loop", daemon=True)
        self._thread.start()
        self._log_action("LOOP", f"Started at {1 / self.tick_rate:.0f} ticks/s")

    def stop(self):
        """Halt ticking and flush a final save. Safe to call repeatedly."""
        with self._lock:
            if not self._running:
                return
            self._running = False
            self._stop_event.set()

        thread = self._thread
        if thread and thread is not threading.current_thread():
            thread.join(timeout=max(1.0, self.tick_rate * 10))
        self._thread = None

        self._log_action("LOOP", "Stopped")
        self._safe_save()

    def _run(self):
        while not self._stop_event.wait(self.tick_rate):
            try:
                self.tick()
            except Exception:
                logger.exception("Tick failed")

    @staticmethod
    def _notify(callback, *args):
        """Invoke a listener callback. Listener errors are logged, never raised."""
        if callback is None:
            return
        try:
            callback(*args)
        except Exception:
            logger.exception("Callback raised")

    # ─────────────────────────────────────────────────
    # TICK
    # ─────────────────────────────────────────────────

    def tick(self) -> dict:
        """One pass of the tick pipeline over wall-clock delta time."""
        with self._lock:
            current = self.clock()
            if self._last_tick_time is None:
                self._last_tick_time = current
            delta_time = max(0.0, current - self._last_tick_time)
            self._last_tick_time = current

            tick_log = run_tick(self.state, delta_time, self.wall_clock())
            self.last_tick_log = tick_log

            for system in tick_log["unlocked"]:
                self._log_action("UNLOCK", f"{system} unlocked")

            self._time_since_save += delta_time
            if self._time_since_save >= self.auto_save_interval:
                self._time_since_save = 0.0
                self._safe_save()

            if tick_log["won"] and not self.victory_announced:
                self.victory_announced = True
                self._log_action("VICTORY",
                                 f"Industry control reached {self.state.industry_control:.0f}%")
                self._notify(self.on_victory, self.state)

        self._notify(self.on_tick, tick_log)
        return tick_log

    def _safe_save(self) -> bool:
        """Invoke the save callback. Failures are logged, never raised."""
        if self.save_callback is None:
            return False
        with self._lock:
            try:
                ok = self.save_callback(self.state)
            except Exception as e:
                logger.error(f"Save callback raised: {e}")
                return False
        if ok is False:
            logger.warning("Save failed")
            return False
        return True

    def save(self) -> dict:
        """Manual save from the player."""
        if self._safe_save():
            self._log_action("SAVE", "Game saved")
            return {"success": True}
        return {"success": False, "error": "Save failed"}

    # ─────────────────────────────────────────────────
    # PLAYER ACTIONS
    # ─────────────────────────────────────────────────

    def queue_songs(self, count: int) -> dict:
        with self._lock:
            if count <= 0:
                return {"success": False, "error": "Count must be positive"}
            cost = songs.calculate_song_cost(self.state, count)
            if not songs.queue_songs(self.state, count):
                return {"success": False,
                        "error": f"Cannot afford {count} song(s) (${cost:.2f})"}
            self._log_action("SONGS", f"Queued {count} song(s) for ${cost:.2f}")
            return {"success": True, "queued": count, "cost": cost,
                    "songs_in_queue": self.state.songs_in_queue}

    def purchase_upgrade(self, upgrade_id: str) -> dict:
        with self._lock:
            upgrade = get_upgrade_by_id(upgrade_id)
            if upgrade is None:
                return {"success": False, "error": f"Unknown upgrade: {upgrade_id}"}
            if self.state.owns_upgrade(upgrade_id):
                return {"success": False, "error": f"{upgrade.name} already purchased"}
            if not tech.meets_prerequisites(self.state, upgrade):
                return {"success": False,
                        "error": f"{upgrade.name} requires {upgrade.previous_id()}"}
            if not tech.purchase_tech_upgrade(self.state, upgrade_id):
                return {"success": False,
                        "error": f"Cannot afford {upgrade.name} (${upgrade.cost:,.0f})"}
            self._log_action("TECH", f"Purchased {upgrade.name}")
            return {"success": True, "upgrade_id": upgrade_id,
                    "current_tech_tier": self.state.current_tech_tier}

    def perform_prestige(self) -> dict:
        with self._lock:
            old_name = self.state.current_artist.name
            if not prestige.perform_prestige(self.state, self.wall_clock()):
                return {"success": False, "error": "Prestige is not unlocked"}
            new_name = self.state.current_artist.name
            self._log_action("PRESTIGE", f"{old_name} retired. Now developing {new_name}")
            return {"success": True, "new_artist": new_name,
                    "total_prestiges": self.state.total_prestiges}

    def press_album(self, copies: int = BASE_COPIES,
                    price_per_copy: float = BASE_PRICE_PER_COPY) -> dict:
        with self._lock:
            if not self.state.unlocked_systems.physical_albums:
                return {"success": False, "error": "Physical albums are not unlocked"}
            if not albums.press_album(self.state, copies, price_per_copy, self.wall_clock()):
                cost = albums.calculate_press_cost(copies)
                return {"success": False,
                        "error": f"Cannot press {copies} copies (${cost:,.0f})"}
            album = self.state.active_album_batch
            self._log_action("ALBUM", f"Pressed {album.name}: {copies} copies")
            return {"success": True, "album": album.name}

    def start_tour(self, tier: int) -> dict:
        with self._lock:
            now = self.wall_clock()
            tour_tier = get_tour_tier(tier)
            if tour_tier is None:
                return {"success": False, "error": f"Unknown tour tier: {tier}"}
            if not self.state.unlocked_systems.tours:
                return {"success": False, "error": "Tours are not unlocked"}
            if self.state.active_tour is not None:
                return {"success": False, "error": "A tour is already running"}
            if tours.is_tour_on_cooldown(self.state, now):
                remaining = tours.get_tour_cooldown_remaining(self.state, now)
                return {"success": False, "error": f"Tour cooldown: {remaining:.0f}s"}
            if not tours.start_tour(self.state, tier, now):
                return {"success": False,
                        "error": f"Cannot afford {tour_tier.name} (${tour_tier.cost:,.0f})"}
            self._log_action("TOUR", f"Started {self.state.active_tour.name} ({tour_tier.name})")
            return {"success": True, "tour": self.state.active_tour.name}

    def activate_boost(self, ability_id: str) -> dict:
        with self._lock:
            ability = get_ability_by_id(ability_id)
            if ability is None:
                return {"success": False, "error": f"Unknown ability: {ability_id}"}
            cost = boosts.get_ability_cost(self.state, ability_id)
            if not boosts.activate_boost(self.state, ability_id, self.wall_clock()):
                return {"success": False,
                        "error": f"Cannot afford {ability.name} (${cost:,.2f})"}
            self._log_action("BOOST", f"Activated {ability.name}")
            return {"success": True, "ability_id": ability_id, "cost": cost}

    def purchase_platform(self, platform_id: str) -> dict:
        with self._lock:
            platform = get_platform_by_id(platform_id)
            if platform is None:
                return {"success": False, "error": f"Unknown platform: {platform_id}"}
            if self.state.owns_platform(platform_id):
                return {"success": False, "error": f"{platform.name} already owned"}
            if not platforms.purchase_platform(self.state, platform_id):
                return {"success": False,
                        "error": f"Cannot afford {platform.name} (${platform.cost:,.0f})"}
            self._log_action("PLATFORM",
                             f"Acquired {platform.name}. "
                             f"Control {self.state.industry_control:.0f}%")
            return {"success": True, "platform_id": platform_id,
                    "industry_control": self.state.industry_control}

    # ─────────────────────────────────────────────────
    # ACTION LOG
    # ─────────────────────────────────────────────────

    def _log_action(self, action_type: str, detail: str):
        """Add an entry to the action log."""
        entry = {
            "type": action_type,
            "detail": detail,
            "timestamp": datetime.now().isoformat(),
        }
        self.action_log.append(entry)
        if len(self.action_log) > ACTION_LOG_LIMIT:
            del self.action_log[:-ACTION_LOG_LIMIT]
        logger.info(f"[{action_type}] {detail}")
        self._notify(self.on_log_entry, entry)

    # ─────────────────────────────────────────────────
    # UI STATE
    # ─────────────────────────────────────────────────

    def get_full_state(self) -> dict:
        """Return everything the web UI needs to render."""
        with self._lock:
            s = self.state
            now = self.wall_clock()

            breakdown = income.get_income_breakdown(s, now)
            fan_rate = (fans.calculate_fan_generation(s, now)
                        + fans.calculate_legacy_fan_contribution(s))

            active_boosts = [
                {"ability_id": b.ability_id, "name": b.name, "type": b.type,
                 "multiplier": b.multiplier,
                 "remaining": boosts.get_boost_remaining_time(b, now)}
                for b in boosts.get_active_boosts(s, now)
            ]

            return {
                "running": self._running,
                "state": state_to_dict(s),
                "derived": {
                    "income_per_second": breakdown["total"],
                    "income_breakdown": breakdown,
                    "fans_per_second": fan_rate,
                    "generation_time": songs.get_generation_time(s, now),
                    "song_time_remaining": songs.get_time_remaining(s, now),
                    "queue_time_remaining": songs.get_total_queue_time(s, now),
                    "max_affordable_songs": songs.calculate_max_affordable(s),
                    "song_cost": songs.calculate_song_cost(s, 1),
                    "available_upgrades": [u.id for u in tech.get_available_upgrades(s)],
                    "tech_breakdown": tech.get_tech_multipliers(s),
                    "can_prestige": prestige.can_prestige(s),
                    "prestige_bonus": prestige.get_prestige_bonus(s),
                    "album_status": albums.get_album_status(s, now),
                    "tour_status": tours.get_tour_status(s, now),
                    "tour_cooldown_remaining": tours.get_tour_cooldown_remaining(s, now),
                    "active_boosts": active_boosts,
                    "ability_costs": {a.id: boosts.get_ability_cost(s, a.id)
                                      for a in ALL_ABILITIES},
                    "available_platforms": [p.id for p in platforms.get_available_platforms(s)],
                    "victory": platforms.has_won(s),
                },
                "action_log": self.action_log[-50:],
            }
