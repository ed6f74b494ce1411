import json

import pytest

from anistream.core.config_manager import ConfigManager
from anistream.core.exceptions import ConfigurationError


def test_defaults_are_written(tmp_path):
    manager = ConfigManager(tmp_path)

    assert (tmp_path / "settings.json").exists()
    assert (tmp_path / "sources.json").exists()
    assert manager.settings.http.timeout == 30
    assert manager.settings.logging.level == "WARNING"
    assert list(manager.get_enabled_sources()) == ["anilibria"]

    anilibria = manager.sources.get_source("anilibria")
    assert anilibria.config["base_url"] == "https://anilibria.tv"
    assert anilibria.config["enable_tracker"] is True


def test_corrupt_settings_are_backed_up(tmp_path):
    (tmp_path / "settings.json").write_text("{not json", encoding="utf-8")

    manager = ConfigManager(tmp_path)

    assert (tmp_path / "settings.json.backup").read_text(encoding="utf-8") == "{not json"
    assert manager.settings.search.min_query_length == 2
    assert json.loads((tmp_path / "settings.json").read_text(encoding="utf-8"))["http"]["timeout"] == 30


def test_invalid_sources_are_backed_up(tmp_path):
    (tmp_path / "sources.json").write_text(json.dumps({"sources": {"x": {"priority": 0}}}), encoding="utf-8")

    manager = ConfigManager(tmp_path)

    assert (tmp_path / "sources.json.backup").exists()
    assert "anilibria" in manager.sources.sources


def test_update_setting_persists(config_manager):
    config_manager.update_setting("search.max_results_per_source", 10)

    reloaded = ConfigManager(config_manager.config_dir)
    assert reloaded.settings.search.max_results_per_source == 10
    assert reloaded.get_setting("search.max_results_per_source") == 10


@pytest.mark.parametrize("key, value", [
    ("search.unknown", 1),
    ("nothing.timeout", 1),
    ("http.timeout", 1),
    ("ui.color_theme", "neon"),
])
def test_update_setting_rejects_bad_input(config_manager, key, value):
    with pytest.raises(ConfigurationError):
        config_manager.update_setting(key, value)

    assert config_manager.settings.http.timeout == 30


def test_get_setting_default(config_manager):
    assert config_manager.get_setting("ui.missing", "fallback") == "fallback"
    assert config_manager.get_setting("ui")["color_theme"] == "default"


def test_enable_and_disable_source(config_manager):
    config_manager.disable_source("anilibria")
    assert config_manager.get_enabled_sources() == {}

    config_manager.enable_source("anilibria")
    assert list(ConfigManager(config_manager.config_dir).get_enabled_sources()) == ["anilibria"]


def test_enabled_sources_follow_priority(config_manager):
    config_manager.update_source_config("mirror", {"enabled": True, "priority": 5})
    config_manager.update_source_config("anilibria", {"priority": 10})

    assert list(config_manager.get_enabled_sources()) == ["mirror", "anilibria"]


def test_invalid_source_config_is_rejected(config_manager):
    with pytest.raises(ConfigurationError):
        config_manager.update_source_config("anilibria", {"config": {"rate_limit": "fast"}})


def test_reset_to_defaults(config_manager):
    config_manager.update_setting("ui.color_theme", "dark")
    config_manager.disable_source("anilibria")

    config_manager.reset_to_defaults()

    assert config_manager.settings.ui.color_theme == "default"
    assert list(config_manager.get_enabled_sources()) == ["anilibria"]
