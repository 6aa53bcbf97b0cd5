"""Unit tests for :mod:`charview.config.session` and :mod:`charview.config.store`."""

import json

import pytest

from charview.config.session import SettingsSession, open_session
from charview.config.settings import DEFAULT_SETTINGS
from charview.config.store import SETTINGS_ENV, JsonSettingsStore, MemorySettingsStore, default_settings_path
from charview.core.classify import LOWER


def test_session_loads_and_merges_persisted_record() -> None:
    session = SettingsSession(MemorySettingsStore({"showStatistics": True}))
    assert session.settings.show_statistics is True
    assert session.settings.number_color == DEFAULT_SETTINGS.number_color


def test_every_mutation_is_saved_and_broadcast() -> None:
    store = MemorySettingsStore()
    session = SettingsSession(store)
    seen = []
    session.subscribe(seen.append)

    assert session.apply_preset("dark") is True
    session.set_color(LOWER, "#010203")
    session.set_option("show_color_key", True)

    assert store.saves == 3
    assert len(seen) == 3
    assert store.data["currentPreset"] == "custom"
    assert store.data["lowerColor"] == "#010203"
    assert store.data["showColorKey"] is True
    assert seen[-1] == session.settings


def test_unknown_preset_neither_saves_nor_notifies() -> None:
    store = MemorySettingsStore()
    session = SettingsSession(store)
    seen = []
    session.subscribe(seen.append)

    before = session.settings
    assert session.apply_preset("nonexistent") is False
    assert session.settings == before
    assert store.saves == 0
    assert seen == []


def test_render_uses_live_settings() -> None:
    session = SettingsSession(MemorySettingsStore())
    assert session.render("a b").stats is None
    session.set_option("show_statistics", True)
    assert session.render("a b").stats.spaces == 1


def test_json_store_round_trip(tmp_path) -> None:
    path = tmp_path / "nested" / "settings.json"
    store = JsonSettingsStore(str(path))
    assert store.load() == {}

    session = SettingsSession(store)
    session.apply_preset("forest")

    on_disk = json.loads(path.read_text(encoding="utf-8"))
    assert on_disk["currentPreset"] == "forest"
    assert SettingsSession(JsonSettingsStore(str(path))).settings == session.settings


def test_json_store_tolerates_bad_files(tmp_path) -> None:
    path = tmp_path / "settings.json"
    path.write_text("{not json", encoding="utf-8")
    assert JsonSettingsStore(str(path)).load() == {}

    path.write_text("[1, 2]", encoding="utf-8")
    assert JsonSettingsStore(str(path)).load() == {}


def test_settings_path_from_environment(tmp_path, monkeypatch) -> None:
    target = tmp_path / "cv.json"
    monkeypatch.setenv(SETTINGS_ENV, str(target))
    assert default_settings_path() == str(target)

    session = open_session()
    session.set_option("show_statistics", True)
    assert json.loads(target.read_text(encoding="utf-8"))["showStatistics"] is True


class _ReadOnlyStore(MemorySettingsStore):
    def save(self, data) -> None:
        raise OSError("read-only file system")


def test_failed_save_keeps_previous_settings() -> None:
    session = SettingsSession(_ReadOnlyStore())
    seen = []
    session.subscribe(seen.append)

    with pytest.raises(OSError):
        session.set_option("show_statistics", True)
    with pytest.raises(OSError):
        session.apply_preset("dark")

    assert session.settings == DEFAULT_SETTINGS
    assert session.render("a b").stats is None
    assert seen == []
