"""TOML configuration loader and session cookie storage."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib
else:
    try:
        import tomli as tomllib
    except ImportError:
        tomllib = None  # type: ignore[assignment]

DEFAULT_CONFIG_PATH = "~/.config/zocli/config.toml"
DEFAULT_COOKIE_FILE = "~/.config/zocli/cookie"
DEFAULT_DB_PATH = "~/.config/zocli/orders.db"

COOKIE_ENV_VAR = "ZOMATO_COOKIE"


@dataclass
class AuthConfig:
    cookie: str = ""
    cookie_file: str = DEFAULT_COOKIE_FILE


@dataclass
class StorageConfig:
    db_path: str = DEFAULT_DB_PATH


@dataclass
class SyncConfig:
    base_url: str = "https://www.zomato.com"
    page_delay: float = 0.5
    max_pages: int = 50
    timeout: float = 30.0


@dataclass
class StatsConfig:
    group: str = "month"
    top: int = 5


@dataclass
class ZocliConfig:
    auth: AuthConfig = field(default_factory=AuthConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
    sync: SyncConfig = field(default_factory=SyncConfig)
    stats: StatsConfig = field(default_factory=StatsConfig)
    path: str = ""  # File the config was read from, if any


def load_config(path: str | Path | None = None) -> ZocliConfig:
    """Load configuration from a TOML file.

    Falls back to defaults if the file doesn't exist. The session cookie
    can also come from the ZOMATO_COOKIE environment variable.
    """
    raw: dict = {}

    p = Path(path if path is not None else DEFAULT_CONFIG_PATH).expanduser()
    if p.exists():
        if tomllib is None:
            raise ImportError(
                "tomli is required on Python < 3.11: pip install tomli"
            )
        with open(p, "rb") as f:
            raw = tomllib.load(f)

    ath = raw.get("auth", {})
    sto = raw.get("storage", {})
    syn = raw.get("sync", {})
    sts = raw.get("stats", {})

    # Resolve cookie: config file → environment variable
    cookie = ath.get("cookie", "") or os.environ.get(COOKIE_ENV_VAR, "")

    return ZocliConfig(
        auth=AuthConfig(
            cookie=cookie.strip(),
            cookie_file=ath.get("cookie_file", DEFAULT_COOKIE_FILE),
        ),
        storage=StorageConfig(
            db_path=sto.get("db_path", DEFAULT_DB_PATH),
        ),
        sync=SyncConfig(
            base_url=syn.get("base_url", "https://www.zomato.com"),
            page_delay=float(syn.get("page_delay", 0.5)),
            max_pages=int(syn.get("max_pages", 50)),
            timeout=float(syn.get("timeout", 30.0)),
        ),
        stats=StatsConfig(
            group=sts.get("group", "month"),
            top=int(sts.get("top", 5)),
        ),
        path=str(p),
    )


def resolve_cookie(config: ZocliConfig) -> str:
    """Return the session cookie from config/env, else the saved cookie file."""
    if config.auth.cookie:
        return config.auth.cookie
    cookie_path = Path(config.auth.cookie_file).expanduser()
    if cookie_path.exists():
        return cookie_path.read_text(encoding="utf-8").strip()
    return ""


def save_cookie(config: ZocliConfig, value: str) -> Path:
    """Write the cookie file (mode 0600) and return its path."""
    cookie_path = Path(config.auth.cookie_file).expanduser()
    cookie_path.parent.mkdir(parents=True, exist_ok=True)
    cookie_path.touch(mode=0o600, exist_ok=True)
    os.chmod(cookie_path, 0o600)
    cookie_path.write_text(value.strip() + "\n", encoding="utf-8")
    return cookie_path


def clear_cookie(config: ZocliConfig) -> bool:
    """Delete the saved cookie file. Returns whether one existed."""
    cookie_path = Path(config.auth.cookie_file).expanduser()
    if cookie_path.exists():
        cookie_path.unlink()
        return True
    return False
