from __future__ import annotations
import json
from pathlib import Path

_DEFAULTS = {
    "channel": 0,
    "note": 60,
    "velocity": 63,
    "min_velocity": 0,
    "max_velocity": 127,
    "random_seed": None,
    "running_status": False,
}

class AppConfig:
    def __init__(self, path: Path | None = None) -> None:
        self._path = path or Path.home() / ".config" / "keyboard-io" / "config.json"
        self.channel: int = _DEFAULTS["channel"]
        self.note: int = _DEFAULTS["note"]
        self.velocity: int = _DEFAULTS["velocity"]
        self.min_velocity: int = _DEFAULTS["min_velocity"]
        self.max_velocity: int = _DEFAULTS["max_velocity"]
        self.random_seed: int | None = _DEFAULTS["random_seed"]
        self.running_status: bool = _DEFAULTS["running_status"]
        self._load()

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> None:
        if not self._path.exists():
            return
        try:
            data = json.loads(self._path.read_text())
            for key in _DEFAULTS:
                if key in data:
                    setattr(self, key, data[key])
        except (json.JSONDecodeError, OSError):
            pass

    def save(self) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        data = {key: getattr(self, key) for key in _DEFAULTS}
        self._path.write_text(json.dumps(data, indent=2))
