"""
test_config_loader.py — config.yaml / config.local.yaml merge
=============================================================
"""

from pathlib import Path

import yaml

from config_loader import db_path_from, i18n_settings, load_config


def write_yaml(path: Path, data: dict):
    with open(path, "w") as f:
        yaml.safe_dump(data, f)


def test_shipped_config_defaults():
    config = load_config()
    assert i18n_settings(config) == ("fr", ("fr", "en"))
    assert config["rate_limit"]["contact"] == "5/minute"


def test_local_overrides_top_level_keys(tmp_path, monkeypatch):
    monkeypatch.delenv("PORTFOLIO_DB_PATH", raising=False)
    write_yaml(tmp_path / "config.yaml", {"server": {"port": 8080}, "i18n": {"default_language": "fr"}})
    write_yaml(tmp_path / "config.local.yaml", {"server": {"port": 9000}})

    config = load_config(tmp_path)

    assert config["server"] == {"port": 9000}
    assert config["i18n"]["default_language"] == "fr"


def test_missing_files_give_empty_config(tmp_path, monkeypatch):
    monkeypatch.delenv("PORTFOLIO_DB_PATH", raising=False)
    assert load_config(tmp_path) == {}


def test_env_overrides_db_path(tmp_path, monkeypatch):
    write_yaml(tmp_path / "config.yaml", {"database": {"path": "db/portfolio.db"}})
    monkeypatch.setenv("PORTFOLIO_DB_PATH", str(tmp_path / "other.db"))

    config = load_config(tmp_path)

    assert db_path_from(config, tmp_path) == tmp_path / "other.db"


def test_relative_db_path_hangs_off_root(tmp_path):
    assert db_path_from({}, tmp_path) == tmp_path / "db" / "portfolio.db"
    assert db_path_from({"database": {"path": "data/x.db"}}, tmp_path) == tmp_path / "data" / "x.db"


def test_i18n_settings_defaults_and_normalisation():
    assert i18n_settings({}) == ("fr", ("fr", "en"))
    default, supported = i18n_settings({"i18n": {"default_language": "EN", "supported_languages": ["fr"]}})
    assert default == "en"
    assert supported == ("en", "fr")
