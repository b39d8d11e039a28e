"""Unit tests for hozokit_generator.settings."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from hozokit_generator.settings import (
    PROJECT_SETTINGS_KEY,
    JsonSettingsStore,
    MemorySettingsStore,
)


class TestMemorySettingsStore:
    @pytest.mark.unit
    def test_get_and_set(self):
        store = MemorySettingsStore()
        assert store.get(PROJECT_SETTINGS_KEY) is None
        store.set(PROJECT_SETTINGS_KEY, {"project_name": "My Theme"})
        assert store.get(PROJECT_SETTINGS_KEY) == {"project_name": "My Theme"}

    @pytest.mark.unit
    def test_initial_data_is_copied(self):
        data = {"a": 1}
        store = MemorySettingsStore(data)
        store.set("b", 2)
        assert "b" not in data


class TestJsonSettingsStore:
    @pytest.mark.unit
    def test_missing_file_reads_empty(self, tmp_path: Path):
        assert JsonSettingsStore(tmp_path / "settings.json").get(PROJECT_SETTINGS_KEY) is None

    @pytest.mark.unit
    def test_set_writes_pretty_json(self, tmp_path: Path):
        path = tmp_path / "sub" / "settings.json"
        store = JsonSettingsStore(path)
        store.set(PROJECT_SETTINGS_KEY, {"project_name": "My Theme"})
        store.set("componentSettings", {"component_name": "Hero"})

        raw = path.read_text()
        assert raw.endswith("\n")
        assert json.loads(raw) == {
            PROJECT_SETTINGS_KEY: {"project_name": "My Theme"},
            "componentSettings": {"component_name": "Hero"},
        }

    @pytest.mark.unit
    def test_corrupted_file_reads_empty_and_is_rewritten(self, tmp_path: Path):
        path = tmp_path / "settings.json"
        path.write_text("{not json")
        store = JsonSettingsStore(path)

        assert store.get(PROJECT_SETTINGS_KEY) is None
        store.set(PROJECT_SETTINGS_KEY, {"project_name": "Fresh"})
        assert json.loads(path.read_text())[PROJECT_SETTINGS_KEY]["project_name"] == "Fresh"

    @pytest.mark.unit
    def test_non_object_file_reads_empty(self, tmp_path: Path):
        path = tmp_path / "settings.json"
        path.write_text("[1, 2]")
        assert JsonSettingsStore(path).get(PROJECT_SETTINGS_KEY) is None
