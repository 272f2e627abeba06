"""Tests for config loading and cookie storage."""

import os
import stat

import pytest

from zocli.config import (
    ZocliConfig,
    clear_cookie,
    load_config,
    resolve_cookie,
    save_cookie,
)


@pytest.fixture
def write_toml(tmp_path):
    def _write(content: str):
        path = tmp_path / "config.toml"
        path.write_text(content, encoding="utf-8")
        return path

    return _write


def test_load_config_defaults():
    """Loading with no file returns all defaults."""
    config = load_config()
    assert isinstance(config, ZocliConfig)
    assert config.auth.cookie == ""
    assert config.auth.cookie_file.endswith("zocli/cookie")
    assert config.storage.db_path.endswith("orders.db")
    assert config.sync.base_url == "https://www.zomato.com"
    assert config.sync.page_delay == 0.5
    assert config.sync.max_pages == 50
    assert config.stats.group == "month"
    assert config.stats.top == 5


def test_load_config_nonexistent_file():
    config = load_config("/nonexistent/path.toml")
    assert config.sync.max_pages == 50


def test_load_config_from_toml(write_toml):
    path = write_toml(
        """\
[auth]
cookie = "abc=1; def=2"

[storage]
db_path = "/var/zocli/orders.db"

[sync]
page_delay = 1.5
max_pages = 10

[stats]
group = "year"
top = 10
"""
    )
    config = load_config(path)
    assert config.auth.cookie == "abc=1; def=2"
    assert config.storage.db_path == "/var/zocli/orders.db"
    assert config.sync.page_delay == 1.5
    assert config.sync.max_pages == 10
    assert config.sync.timeout == 30.0
    assert config.stats.group == "year"
    assert config.stats.top == 10
    assert config.path == str(path)


def test_load_config_reads_default_location(isolated_home):
    config_dir = isolated_home / ".config" / "zocli"
    config_dir.mkdir(parents=True)
    (config_dir / "config.toml").write_text('[stats]\ntop = 3\n', encoding="utf-8")
    assert load_config().stats.top == 3


def test_cookie_env_override(monkeypatch):
    monkeypatch.setenv("ZOMATO_COOKIE", "env-cookie")
    assert load_config().auth.cookie == "env-cookie"


def test_cookie_file_key_takes_precedence(monkeypatch, write_toml):
    monkeypatch.setenv("ZOMATO_COOKIE", "env-cookie")
    config = load_config(write_toml('[auth]\ncookie = "file-cookie"\n'))
    assert config.auth.cookie == "file-cookie"


def test_save_and_resolve_cookie(tmp_path):
    config = load_config()
    config.auth.cookie_file = str(tmp_path / "secrets" / "cookie")

    path = save_cookie(config, "  session=xyz \n")
    assert path.read_text(encoding="utf-8") == "session=xyz\n"
    assert stat.S_IMODE(os.stat(path).st_mode) == 0o600
    assert resolve_cookie(config) == "session=xyz"


def test_resolve_cookie_prefers_config(tmp_path):
    config = load_config()
    config.auth.cookie_file = str(tmp_path / "cookie")
    save_cookie(config, "saved")
    config.auth.cookie = "inline"
    assert resolve_cookie(config) == "inline"


def test_resolve_cookie_missing():
    assert resolve_cookie(load_config()) == ""


def test_clear_cookie(tmp_path):
    config = load_config()
    config.auth.cookie_file = str(tmp_path / "cookie")
    save_cookie(config, "saved")

    assert clear_cookie(config) is True
    assert clear_cookie(config) is False
    assert resolve_cookie(config) == ""
