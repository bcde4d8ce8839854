import json
import time
from pathlib import Path
from typing import Dict, Any, Optional, Union

from .config import logger, ensure_dir


class StateManager:
    """Dict-backed store for users, carts and contact submissions.

    Persists to a JSON file when a path is given; otherwise lives in memory
    for the lifetime of the process.
    """

    def __init__(self, state_path: Optional[Union[str, Path]] = None):
        self.state_path = Path(state_path) if state_path else None
        self._state: Dict[str, Any] = self._load_state()

    @property
    def persistent(self) -> bool:
        return self.state_path is not None

    def _load_state(self) -> Dict[str, Any]:
        fresh = {"created_at": time.time()}
        if not self.persistent or not self.state_path.exists():
            return fresh
        try:
            with open(self.state_path, "r", encoding="utf-8") as f:
                return json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Failed to load state from {self.state_path}: {e}")
            fresh["error"] = str(e)
            return fresh

    def save(self):
        """Write state to disk. No-op for in-memory stores."""
        if not self.persistent:
            return
        ensure_dir(self.state_path.parent)
        try:
            with open(self.state_path, "w", encoding="utf-8") as f:
                json.dump(self._state, f, indent=2)
        except OSError as e:
            logger.error(f"Failed to save state to {self.state_path}: {e}")

    def get(self, key: str, default: Any = None) -> Any:
        return self._state.get(key, default)

    def set(self, key: str, value: Any):
        self._state[key] = value
        self.save()

    def section(self, name: str) -> Dict[str, Any]:
        """Return a mutable section (dict), creating it if needed.

        Callers mutating the section are responsible for calling save().
        """
        return self._state.setdefault(name, {})

    def update_section(self, section: str, data: Dict[str, Any]):
        self.section(section).update(data)
        self.save()

    def append_item(self, section: str, item: Any):
        """Append to the "items" list of a section and save."""
        self.section(section).setdefault("items", []).append(item)
        self.save()
