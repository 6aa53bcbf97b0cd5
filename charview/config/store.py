import json
import logging
import os
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

SETTINGS_ENV = "CHARVIEW_SETTINGS"


def default_settings_path() -> str:
    env = os.environ.get(SETTINGS_ENV)
    if env:
        return env
    return os.path.join(os.path.expanduser("~"), ".charview", "settings.json")


class JsonSettingsStore:
    """Flat JSON record on disk; load() never raises, save() does."""

    def __init__(self, path: Optional[str] = None):
        self.path = path or default_settings_path()

    def load(self) -> Dict[str, Any]:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError):
            logger.warning("Could not read settings from %s, using defaults", self.path, exc_info=True)
            return {}
        if not isinstance(data, dict):
            logger.warning("Settings file %s does not hold an object, using defaults", self.path)
            return {}
        return data

    def save(self, data: Dict[str, Any]) -> None:
        folder = os.path.dirname(self.path)
        if folder:
            os.makedirs(folder, exist_ok=True)
        tmp = self.path + ".tmp"
        with open(tmp, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)
        os.replace(tmp, self.path)
        logger.debug("Saved settings to %s", self.path)


class MemorySettingsStore:
    def __init__(self, data: Optional[Dict[str, Any]] = None):
        self.data: Dict[str, Any] = dict(data or {})
        self.saves = 0

    def load(self) -> Dict[str, Any]:
        return dict(self.data)

    def save(self, data: Dict[str, Any]) -> None:
        self.data = dict(data)
        self.saves += 1
