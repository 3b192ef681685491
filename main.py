"""
Music Industry Simulator: Main Entry Point

Usage:
    python main.py                      # Serve the game on MIS_HOST:MIS_PORT
    python main.py --simulate 300       # Headless: run 300 simulated seconds
    python main.py --simulate 300 --save   # ...and write the result to the save
"""

import logging
import sys

from config import DATA_DIR, HOST, PORT, LOG_LEVEL, TICK_RATE
from formatting import format_money, format_number, format_time
from models import create_initial_game_state
from save import SaveStore
from songs import queue_songs, calculate_max_affordable
from engine import run_ticks
from income import get_income_breakdown
from fans import calculate_fan_generation, calculate_legacy_fan_contribution

logger = logging.getLogger("mis.main")


def show_status(state):
    """Print current run status."""
    breakdown = get_income_breakdown(state)
    fan_rate = calculate_fan_generation(state) + calculate_legacy_fan_contribution(state)
    unlocked = [name for name, on in vars(state.unlocked_systems).items() if on]

    print(f"\n{'═'*60}")
    print(f"  MUSIC INDUSTRY SIMULATOR: STATUS")
    print(f"{'═'*60}")
    print(f"  Artist: {state.current_artist.name}")
    print(f"  Money: {format_money(state.money)}  ({format_money(breakdown['total'])}/s)")
    print(f"  Fans: {format_number(state.current_artist.fans)}  ({fan_rate:.2f}/s)")
    print(f"  Songs: {state.total_completed_songs} done, {state.songs_in_queue} queued")
    print(f"  Tech tier: {state.current_tech_tier}")
    print(f"  Industry control: {state.industry_control:.0f}%")
    print(f"  Prestiges: {state.total_prestiges}  Legacy acts: {len(state.legacy_artists)}")
    print(f"  Unlocked: {', '.join(unlocked) or 'nothing yet'}")
    print(f"  Time played: {format_time(state.total_time_played)}")
    print(f"{'═'*60}")


def simulate(seconds: float, write_save: bool = False):
    """Run a headless simulation from the current save (or a fresh game)."""
    store = SaveStore(DATA_DIR)
    state = store.load() or create_initial_game_state()

    # Spend the starting money on songs so the run has something to do
    affordable = calculate_max_affordable(state)
    if state.songs_in_queue == 0 and affordable > 0:
        queue_songs(state, affordable)

    logs = run_ticks(state, seconds, TICK_RATE)
    unlocked = [name for log in logs for name in log["unlocked"]]
    logger.info(f"Simulated {seconds}s in {len(logs)} ticks")
    if unlocked:
        logger.info(f"Unlocked during run: {', '.join(unlocked)}")

    show_status(state)

    if write_save:
        if store.save(state):
            print(f"  Saved to {store.save_path}")
        else:
            print(f"  Save failed")


def serve():
    import uvicorn
    from web.routes import app, init_game, shutdown_game

    game = init_game(DATA_DIR)
    game.start()

    print("=" * 50)
    print("  MUSIC INDUSTRY SIMULATOR")
    print("=" * 50)
    print(f"  Server: http://{HOST}:{PORT}")
    print(f"  Data:   {DATA_DIR}")
    print("  Press Ctrl+C to stop.")
    print("=" * 50)

    try:
        uvicorn.run(app, host=HOST, port=PORT, log_level="warning")
    finally:
        shutdown_game()


def main():
    logging.basicConfig(
        level=LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    args = sys.argv[1:]

    if "--simulate" in args:
        idx = args.index("--simulate")
        try:
            seconds = float(args[idx + 1])
        except (IndexError, ValueError):
            print("Usage: python main.py --simulate SECONDS [--save]")
            sys.exit(2)
        simulate(seconds, write_save="--save" in args)
        return

    serve()


if __name__ == "__main__":
    main()
