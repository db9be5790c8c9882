# tests/test_config.py

import logging

import pytest

from renewcal import ConfigError, InvalidTimezoneError
from renewcal.config import Settings, load_settings

def write(tmp_path, text):
    p = tmp_path / "renewcal.toml"
    p.write_text(text, encoding="utf-8")
    return str(p)

def test_defaults_without_file():
    s = load_settings(environ={})
    assert s == Settings()
    assert s.timezone == "UTC"
    assert s.default_reminder_days == 7

def test_file_then_environment(tmp_path):
    path = write(tmp_path, '[renewcal]\ntimezone = "Asia/Shanghai"\ndefault_reminder_days = 3\nmax_workers = 4\n')
    s = load_settings(path, environ={})
    assert (s.timezone, s.default_reminder_days, s.max_workers) == ("Asia/Shanghai", 3, 4)

    s = load_settings(path, environ={"RENEWCAL_TIMEZONE": "Europe/Berlin", "RENEWCAL_LOG_LEVEL": "debug"})
    assert s.timezone == "Europe/Berlin"
    assert s.log_level == "debug"
    assert s.default_reminder_days == 3

def test_config_path_from_environment(tmp_path):
    path = write(tmp_path, 'store_path = "/data/subs.json"\n')
    s = load_settings(environ={"RENEWCAL_CONFIG": path})
    assert s.store_path == "/data/subs.json"

def test_unknown_keys_are_ignored(tmp_path, caplog):
    path = write(tmp_path, '[renewcal]\ncolour = "blue"\n')
    with caplog.at_level(logging.WARNING, logger="renewcal.config"):
        s = load_settings(path, environ={})
    assert s == Settings()
    assert "colour" in caplog.text

def test_missing_file(tmp_path):
    with pytest.raises(ConfigError):
        load_settings(str(tmp_path / "nope.toml"), environ={})

def test_broken_toml(tmp_path):
    with pytest.raises(ConfigError):
        load_settings(write(tmp_path, "timezone = \n"), environ={})

@pytest.mark.parametrize(
    "text",
    ["default_reminder_days = -1\n", 'default_reminder_days = "many"\n', "max_workers = 0\n", 'log_level = "LOUD"\n'],
)
def test_bad_values(tmp_path, text):
    with pytest.raises(ConfigError):
        load_settings(write(tmp_path, text), environ={})

def test_bad_timezone():
    with pytest.raises(InvalidTimezoneError):
        load_settings(environ={"RENEWCAL_TIMEZONE": "Nowhere/Special"})

def test_directory_timezone_name():
    with pytest.raises(InvalidTimezoneError):
        load_settings(environ={"RENEWCAL_TIMEZONE": "America"})
