"""Tests for configuration loading."""

import json

import pytest

from spaceelevator import config as config_module
from spaceelevator.config import Config, get_config, load_config, set_config


@pytest.fixture
def restore_config():
    """Restore the global config after a test changes it."""
    saved = config_module._config
    yield
    config_module._config = saved


class TestLoadConfig:
    """Tests for load_config function."""

    def test_none_returns_defaults(self):
        config = load_config(None)
        assert config.shadow.earth_radius_km == 6371.0
        assert config.shadow.use_upper_limb is True
        assert config.astronomy.iers_auto_download is False
        assert config.site.height_km == 100_000.0

    def test_missing_file_returns_defaults(self, tmp_path):
        config = load_config(tmp_path / "missing.json")
        assert config == Config()

    def test_partial_override(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({
            "shadow": {"earth_radius_km": 6378.137},
            "site": {"latitude_deg": -10.0},
        }))

        config = load_config(path)
        assert config.shadow.earth_radius_km == 6378.137
        assert config.shadow.use_upper_limb is True  # untouched
        assert config.site.latitude_deg == -10.0
        assert config.site.longitude_deg == 120.0  # untouched

    def test_malformed_file_raises(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("{not json")
        with pytest.raises(json.JSONDecodeError):
            load_config(path)


class TestGlobalConfig:
    """Tests for the global config accessors."""

    def test_set_config(self, restore_config):
        custom = Config()
        custom.shadow.use_upper_limb = False
        set_config(custom)
        assert get_config() is custom

    def test_reload_reads_config_file(self, restore_config, tmp_path, monkeypatch):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"shadow": {"use_upper_limb": False}}))
        monkeypatch.setattr(config_module, "CONFIG_FILE", path)

        config = config_module.reload_config()
        assert config.shadow.use_upper_limb is False
        assert get_config() is config
