"""
Music Industry Simulator: Save Store
File-backed persistence with a one-deep backup.

Layout under data_dir:
  save.json          current save envelope {"state", "savedAt", "version"}
  save.backup.json   the previous save, kept before every overwrite

Every public method reports failure by return value. Nothing here raises
into the game loop.
"""

import json
import logging
import os
import shutil

from models import GameState, state_to_dict, state_from_dict
from config import GAME_VERSION, now_ms
from validation import validate_save

logger = logging.getLogger("mis.save")

SAVE_FILENAME = "save.json"
BACKUP_FILENAME = "save.backup.json"


class SaveStore:
    """Reads and writes the save envelope for one data directory."""

    def __init__(self, data_dir: str):
        self.data_dir = data_dir

    @property
    def save_path(self) -> str:
        return os.path.join(self.data_dir, SAVE_FILENAME)

    @property
    def backup_path(self) -> str:
        return os.path.join(self.data_dir, BACKUP_FILENAME)

    def has_save(self) -> bool:
        return os.path.exists(self.save_path)

    # ─────────────────────────────────────────────────
    # WRITE
    # ─────────────────────────────────────────────────

    def _write_atomic(self, text: str):
        os.makedirs(self.data_dir, exist_ok=True)
        if os.path.exists(self.save_path):
            shutil.copyfile(self.save_path, self.backup_path)
        tmp_path = self.save_path + ".tmp"
        with open(tmp_path, "w", encoding="utf-8") as f:
            f.write(text)
        os.replace(tmp_path, self.save_path)

    def save(self, state: GameState) -> bool:
        """Write the state, keeping the previous save as backup."""
        saved_at = now_ms()
        envelope = {
            "state": state_to_dict(state),
            "savedAt": saved_at,
            "version": GAME_VERSION,
        }
        try:
            self._write_atomic(json.dumps(envelope, indent=2, ensure_ascii=False))
        except OSError as e:
            logger.error(f"Failed to save game: {e}")
            return False
        state.last_save_time = saved_at
        logger.debug(f"Saved to {self.save_path}")
        return True

    # ─────────────────────────────────────────────────
    # READ
    # ─────────────────────────────────────────────────

    def _read_envelope(self, path: str):
        """Parsed envelope if the file holds a valid save, else None."""
        try:
            with open(path, "r", encoding="utf-8") as f:
                envelope = json.load(f)
        except FileNotFoundError:
            return None
        except (OSError, ValueError) as e:
            logger.error(f"Failed to read {os.path.basename(path)}: {e}")
            return None

        if not isinstance(envelope, dict) or not validate_save(envelope.get("state")):
            logger.warning(f"{os.path.basename(path)} failed validation")
            return None

        version = envelope.get("version")
        if version != GAME_VERSION:
            logger.warning(f"Save version mismatch: {version} vs {GAME_VERSION}. "
                           f"Loading anyway")
        return envelope

    def _load_state(self, path: str):
        envelope = self._read_envelope(path)
        if envelope is None:
            return None
        try:
            return state_from_dict(envelope["state"])
        except (KeyError, TypeError, AttributeError, ValueError) as e:
            logger.error(f"Failed to rebuild state from {os.path.basename(path)}: {e}")
            return None

    def load(self):
        """Load the primary save, falling back to the backup. None if neither is usable."""
        state = self._load_state(self.save_path)
        if state is None and os.path.exists(self.backup_path):
            logger.warning("Primary save unusable, trying backup")
            state = self._load_state(self.backup_path)
            if state is not None:
                logger.info("Loaded from backup")
        return state

    # ─────────────────────────────────────────────────
    # MAINTENANCE
    # ─────────────────────────────────────────────────

    def delete(self) -> bool:
        removed = False
        for path in (self.save_path, self.backup_path):
            try:
                os.remove(path)
                removed = True
            except FileNotFoundError:
                continue
            except OSError as e:
                logger.error(f"Failed to delete {os.path.basename(path)}: {e}")
                return False
        if removed:
            logger.info("Save data deleted")
        return True

    def export(self):
        """Pretty-printed save envelope, or None if there is no save."""
        try:
            with open(self.save_path, "r", encoding="utf-8") as f:
                envelope = json.load(f)
        except FileNotFoundError:
            logger.warning("No save data to export")
            return None
        except (OSError, ValueError) as e:
            logger.error(f"Failed to export save: {e}")
            return None
        return json.dumps(envelope, indent=2, ensure_ascii=False)

    def import_save(self, text: str) -> bool:
        """Validate an exported envelope and make it the current save."""
        try:
            envelope = json.loads(text)
        except ValueError as e:
            logger.error(f"Imported save is not valid JSON: {e}")
            return False
        if not isinstance(envelope, dict) or not validate_save(envelope.get("state")):
            logger.error("Imported save failed validation")
            return False
        try:
            self._write_atomic(json.dumps(envelope, indent=2, ensure_ascii=False))
        except OSError as e:
            logger.error(f"Failed to import save: {e}")
            return False
        logger.info("Save imported")
        return True
