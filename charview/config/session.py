import logging
from typing import Any, Callable, Dict, List, Optional, Protocol

from charview.config.settings import (
    CharViewSettings, apply_preset, resolve_settings, set_color, set_option, to_persisted,
)
from charview.config.store import JsonSettingsStore
from charview.core.model import RenderModel, build_render_model

logger = logging.getLogger(__name__)

Listener = Callable[[CharViewSettings], None]


class SettingsStore(Protocol):
    def load(self) -> Dict[str, Any]: ...

    def save(self, data: Dict[str, Any]) -> None: ...


class SettingsSession:
    """
    Owns the single live configuration.
    Every mutation is saved, then listeners are told to re-render.
    """

    def __init__(self, store: SettingsStore):
        self.store = store
        self.settings: CharViewSettings = resolve_settings(store.load())
        self._listeners: List[Listener] = []

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def render(self, source: str) -> RenderModel:
        return build_render_model(source, self.settings)

    def apply_preset(self, key: str) -> bool:
        updated = apply_preset(self.settings, key)
        if updated is self.settings:
            return False
        self._commit(updated)
        return True

    def set_color(self, category: str, value: str) -> None:
        self._commit(set_color(self.settings, category, value))

    def set_option(self, name: str, value: Any) -> None:
        self._commit(set_option(self.settings, name, value))

    def _commit(self, updated: CharViewSettings) -> None:
        # a failed save leaves the live settings untouched
        self.store.save(to_persisted(updated))
        self.settings = updated
        for listener in list(self._listeners):
            listener(updated)


def open_session(store: Optional[SettingsStore] = None) -> SettingsSession:
    if store is None:
        store = JsonSettingsStore()
    logger.debug("Opening settings session on %r", store)
    return SettingsSession(store)
