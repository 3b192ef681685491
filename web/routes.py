"""
Music Industry Simulator: FastAPI Routes
Player-facing endpoints and the live state WebSocket.
"""

import json
import logging
from fastapi import FastAPI, WebSocket, WebSocketDisconnect
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from config import DATA_DIR, TICKS_PER_SECOND, BASE_COPIES, BASE_PRICE_PER_COPY
from catalog import ALL_TECH_UPGRADES, ALL_PLATFORMS, TOUR_TIERS, ALL_ABILITIES
from models import create_initial_game_state
from save import SaveStore
from game_loop import GameLoop
from web.websocket import ConnectionManager

logger = logging.getLogger("mis.web")


# ─────────────────────────────────────────────────────
# APP SETUP
# ─────────────────────────────────────────────────────

app = FastAPI(title="Music Industry Simulator", version="1.0")
manager = ConnectionManager()
game: GameLoop = None
store: SaveStore = None


def init_game(data_dir: str = None) -> GameLoop:
    """Load (or create) the state and build the loop. Called from main.py."""
    global game, store
    if data_dir is None:
        data_dir = DATA_DIR

    store = SaveStore(data_dir)
    state = store.load()
    if state is None:
        state = create_initial_game_state()
        logger.info(f"New game. Artist: {state.current_artist.name}")
    else:
        logger.info(f"Loaded save. Artist: {state.current_artist.name}, "
                    f"${state.money:,.2f}")

    game = GameLoop(state, save_callback=store.save)

    # Wire up WebSocket callbacks; the loop thread pushes state once per second
    tick_counter = {"n": 0}

    def on_tick(tick_log):
        tick_counter["n"] += 1
        if tick_counter["n"] % TICKS_PER_SECOND == 0:
            manager.broadcast_threadsafe("state_update", game.get_full_state())

    def on_log_entry(entry):
        manager.broadcast_threadsafe("log_entry", entry)

    def on_victory(state):
        manager.broadcast_threadsafe("victory", {
            "industry_control": state.industry_control,
            "time_played": state.total_time_played,
        })

    game.on_tick = on_tick
    game.on_log_entry = on_log_entry
    game.on_victory = on_victory
    return game


def shutdown_game():
    """Stop the loop; stop() performs the final save."""
    if game is not None:
        game.stop()


async def _respond(result: dict) -> JSONResponse:
    """Push the new state to every client, then answer the caller."""
    await manager.broadcast("state_update", game.get_full_state())
    return JSONResponse(result)


# ─────────────────────────────────────────────────────
# WEBSOCKET
# ─────────────────────────────────────────────────────

@app.websocket("/ws")
async def websocket_endpoint(ws: WebSocket):
    await manager.connect(ws)
    try:
        # Send initial state on connect
        state_data = game.get_full_state()
        await ws.send_text(json.dumps({"event": "state_update", "data": state_data}))

        # Keep connection alive; client messages are keepalives only
        while True:
            await ws.receive_text()
    except WebSocketDisconnect:
        manager.disconnect(ws)


# ─────────────────────────────────────────────────────
# PLAYER-FACING API
# ─────────────────────────────────────────────────────

@app.get("/api/state")
async def get_state():
    """Full game state for UI rendering."""
    return JSONResponse(game.get_full_state())


class QueueRequest(BaseModel):
    count: int = Field(1, gt=0)


@app.post("/api/songs/queue")
async def queue_songs(req: QueueRequest):
    return await _respond(game.queue_songs(req.count))


class UpgradeRequest(BaseModel):
    upgrade_id: str


@app.post("/api/tech/purchase")
async def purchase_upgrade(req: UpgradeRequest):
    return await _respond(game.purchase_upgrade(req.upgrade_id))


@app.post("/api/prestige")
async def prestige():
    """Retire the current artist into a legacy act."""
    return await _respond(game.perform_prestige())


class PressRequest(BaseModel):
    copies: int = Field(BASE_COPIES, gt=0)
    price_per_copy: float = Field(BASE_PRICE_PER_COPY, ge=0)


@app.post("/api/albums/press")
async def press_album(req: PressRequest):
    return await _respond(game.press_album(req.copies, req.price_per_copy))


class TourRequest(BaseModel):
    tier: int


@app.post("/api/tours/start")
async def start_tour(req: TourRequest):
    return await _respond(game.start_tour(req.tier))


class BoostRequest(BaseModel):
    ability_id: str


@app.post("/api/boosts/activate")
async def activate_boost(req: BoostRequest):
    return await _respond(game.activate_boost(req.ability_id))


class PlatformRequest(BaseModel):
    platform_id: str


@app.post("/api/platforms/purchase")
async def purchase_platform(req: PlatformRequest):
    return await _respond(game.purchase_platform(req.platform_id))


@app.post("/api/save")
async def save_game():
    """Save current game state."""
    return JSONResponse(game.save())


# ─────────────────────────────────────────────────────
# CATALOG
# ─────────────────────────────────────────────────────

@app.get("/api/catalog")
async def get_catalog():
    """Static progression tables: upgrades, platforms, tours, abilities."""
    return JSONResponse({
        "upgrades": [
            {"id": u.id, "name": u.name, "description": u.description,
             "cost": u.cost, "tier": u.tier, "sub_tier": u.sub_tier,
             "effects": [{"kind": e.kind.value, "value": e.value} for e in u.effects]}
            for u in ALL_TECH_UPGRADES
        ],
        "platforms": [
            {"id": p.id, "name": p.name, "description": p.description,
             "cost": p.cost, "income_multiplier": p.income_multiplier,
             "control_contribution": p.control_contribution}
            for p in ALL_PLATFORMS
        ],
        "tours": [
            {"tier": t.tier, "name": t.name, "cost": t.cost,
             "duration_seconds": t.duration_seconds,
             "revenue_multiplier": t.revenue_multiplier,
             "cooldown_seconds": t.cooldown_seconds}
            for t in TOUR_TIERS
        ],
        "abilities": [
            {"id": a.id, "name": a.name, "description": a.description,
             "base_cost": a.base_cost, "cost_scaling": a.cost_scaling,
             "duration": a.duration, "multiplier": a.multiplier, "type": a.type}
            for a in ALL_ABILITIES
        ],
    })
