"""
Test suite for patterncraft.config_loader.

Network: NO (all file I/O via tmp_path)
"""

import json

import pytest

from patterncraft import config_loader
from patterncraft.cli import main
from patterncraft.config_loader import (
    SECTIONS,
    clear_config_cache,
    load_config_bundle,
    load_runtime_config,
    load_section,
)


class TestLoadConfigBundle:
    def test_loads_every_section(self, config_dir, runtime_config):
        bundle = load_config_bundle(config_dir=str(config_dir))
        assert set(bundle) == set(SECTIONS)
        assert bundle["payments"] == runtime_config["payments"]

    def test_missing_file_degrades_to_empty_sections(self, tmp_path):
        bundle = load_config_bundle(config_dir=str(tmp_path), strict=False)
        assert all(bundle[name] == {} for name in SECTIONS)

    def test_missing_file_strict(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config_bundle(config_dir=str(tmp_path), strict=True)

    def test_malformed_json(self, tmp_path):
        (tmp_path / config_loader.RUNTIME_CONFIG_FILE).write_text("{not json", encoding="utf-8")
        assert load_runtime_config(config_dir=str(tmp_path), strict=False) == {}
        with pytest.raises(ValueError, match="Malformed"):
            load_runtime_config(config_dir=str(tmp_path), strict=True)

    def test_top_level_must_be_object(self, tmp_path):
        (tmp_path / config_loader.RUNTIME_CONFIG_FILE).write_text("[]", encoding="utf-8")
        with pytest.raises(ValueError):
            load_runtime_config(config_dir=str(tmp_path), strict=True)

    def test_missing_section(self, tmp_path):
        (tmp_path / config_loader.RUNTIME_CONFIG_FILE).write_text(
            json.dumps({"payments": {}}), encoding="utf-8"
        )
        bundle = load_config_bundle(config_dir=str(tmp_path), strict=False)
        assert bundle["discounts"] == {}
        clear_config_cache()
        with pytest.raises(ValueError, match="discounts"):
            load_config_bundle(config_dir=str(tmp_path), strict=True)

    def test_non_object_section(self, tmp_path):
        payload = {name: {} for name in SECTIONS}
        payload["settings"] = ["not", "a", "dict"]
        (tmp_path / config_loader.RUNTIME_CONFIG_FILE).write_text(
            json.dumps(payload), encoding="utf-8"
        )
        assert load_config_bundle(config_dir=str(tmp_path))["settings"] == {}

    def test_strict_from_environment(self, tmp_path, monkeypatch):
        monkeypatch.setenv(config_loader.STRICT_ENV, "true")
        with pytest.raises(FileNotFoundError):
            load_config_bundle(config_dir=str(tmp_path))

    def test_config_dir_from_environment(self, config_dir, monkeypatch):
        monkeypatch.setenv(config_loader.CONFIG_DIR_ENV, str(config_dir))
        assert load_config_bundle()["settings"]["AppName"] == "Test App"

    def test_overrides_deep_merge(self, config_dir):
        bundle = load_config_bundle(
            config_dir=str(config_dir),
            overrides={"payments": {"small_payment_limit": 75}},
        )
        assert bundle["payments"] == {"small_payment_limit": 75, "large_payment_limit": 5000}

    def test_overrides_bypass_cache(self, config_dir):
        load_config_bundle(config_dir=str(config_dir), overrides={"settings": {"AppName": "X"}})
        assert load_config_bundle(config_dir=str(config_dir))["settings"]["AppName"] == "Test App"

    def test_results_cached_until_cleared(self, config_dir):
        first = load_config_bundle(config_dir=str(config_dir))
        first["settings"]["AppName"] = "mutated"
        (config_dir / config_loader.RUNTIME_CONFIG_FILE).write_text(
            json.dumps({name: {} for name in SECTIONS}), encoding="utf-8"
        )

        assert load_config_bundle(config_dir=str(config_dir))["settings"]["AppName"] == "Test App"
        clear_config_cache()
        assert load_config_bundle(config_dir=str(config_dir))["settings"] == {}


class TestLoadSection:
    def test_known_section(self, config_dir):
        section = load_section("discounts", config_dir=str(config_dir))
        assert section == {"rates": {"vip": 0.18, "platinum": 0.25}}

    def test_unknown_section(self, config_dir):
        with pytest.raises(ValueError, match="Unknown config section"):
            load_section("metrics", config_dir=str(config_dir))


class TestPackagedDefaults:
    def test_defaults_ship_inside_the_package(self):
        default = config_loader.DEFAULT_CONFIG_DIR / config_loader.RUNTIME_CONFIG_FILE
        assert default.is_file()
        assert "patterncraft" in str(config_loader.DEFAULT_CONFIG_DIR)

    def test_strict_load_without_config_dir(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        bundle = load_config_bundle(strict=True)
        assert all(bundle[name] for name in SECTIONS)

    def test_cli_strict_config_uses_packaged_defaults(
        self, tmp_path, monkeypatch, console, isolated_logging
    ):
        monkeypatch.chdir(tmp_path)
        args = ["--log-dir", str(tmp_path / "logs"), "--strict-config", "run", "factory"]
        code = main(args, console=console)
        assert code == 0
        assert "config failed" not in console.file.getvalue()
