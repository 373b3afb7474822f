# vcc_gallery/core/config.py
# Loads gallery settings from a TOML file (defaults + overrides).
# - Reads GALLERY_CONFIG or looks for gallery.toml in CWD and its parents
# - Env overrides: MEDIA_ROOT (or PHOTOS_DIR) and PORT
# - Relative media_root / logs_dir are resolved against the CWD
# - Result is a frozen Settings object handed to the app and the renderer

from __future__ import annotations
from pathlib import Path
import os
from typing import Optional

import tomli as tomllib  # py3.11+: tomllib in stdlib; using tomli for compatibility
from pydantic import BaseModel, ConfigDict


# -------------------- Media types --------------------
SUPPORTED_EXT = frozenset({".jpg", ".jpeg", ".png", ".gif", ".mp4", ".mov", ".webm", ".webp"})
VIDEO_EXT = frozenset({".mp4", ".mov", ".webm"})
JPEG_EXT = frozenset({".jpg", ".jpeg"})


# -------------------- Defaults (used if TOML omits keys) --------------------
_DEFAULTS = {
    "gallery": {
        "title": "VCC Gallery",
        "author": "Chance Jiang",
    },
    "paths": {
        "media_root": "photos",
        # "logs_dir": "logs"   # unset = console logging only
    },
    "server": {
        "host": "0.0.0.0",
        "port": 3000,
    },
    "thumbs": {
        "height": 220,
    },
    "logging": {
        "level": "INFO",
        "json": False,
    },
}


class Settings(BaseModel):
    """Immutable runtime configuration; built once at startup."""
    model_config = ConfigDict(frozen=True)

    title: str = _DEFAULTS["gallery"]["title"]
    author: str = _DEFAULTS["gallery"]["author"]
    media_root: Path = Path(_DEFAULTS["paths"]["media_root"])
    logs_dir: Optional[Path] = None
    host: str = _DEFAULTS["server"]["host"]
    port: int = _DEFAULTS["server"]["port"]
    thumb_height: int = _DEFAULTS["thumbs"]["height"]
    log_level: str = _DEFAULTS["logging"]["level"]
    json_logs: bool = _DEFAULTS["logging"]["json"]


# -------------------- Read + merge TOML --------------------
def _find_config_path() -> Path | None:
    """Find gallery.toml without user input.
    Priority:
      1) GALLERY_CONFIG
      2) ./gallery.toml (CWD)
      3) ascend parents from CWD looking for gallery.toml
    """
    cfg_env = os.getenv("GALLERY_CONFIG")
    if cfg_env:
        p = Path(cfg_env).expanduser()
        if p.exists():
            return p

    cur = Path.cwd()
    while True:
        candidate = cur / "gallery.toml"
        if candidate.exists():
            return candidate
        if cur.parent == cur:
            break  # reached filesystem root
        cur = cur.parent
    return None


def _load_config_toml(path: Path | None = None) -> dict:
    """Load TOML from the given path (or the best match) or return {} if not found."""
    path = path or _find_config_path()
    if path and path.exists():
        with path.open("rb") as f:
            return tomllib.load(f)
    return {}


def _section(cfg: dict, name: str) -> dict:
    return {**_DEFAULTS[name], **(cfg.get(name) or {})}


def _resolve(p: str | Path) -> Path:
    p = Path(p).expanduser()
    return p if p.is_absolute() else (Path.cwd() / p).resolve()


def load_settings(config_path: Path | None = None, **overrides) -> Settings:
    """
    Merge defaults <- TOML <- environment <- explicit overrides (CLI flags).
    Overrides with a value of None are ignored so argparse defaults pass through.
    """
    cfg = _load_config_toml(config_path)

    gallery = _section(cfg, "gallery")
    paths = _section(cfg, "paths")
    server = _section(cfg, "server")
    thumbs = _section(cfg, "thumbs")
    logging_cfg = _section(cfg, "logging")

    media_root = os.getenv("MEDIA_ROOT") or os.getenv("PHOTOS_DIR") or paths["media_root"]
    port = os.getenv("PORT") or server["port"]

    values = {
        "title": str(gallery["title"]),
        "author": str(gallery["author"]),
        "media_root": media_root,
        "logs_dir": paths.get("logs_dir"),
        "host": str(server["host"]),
        "port": int(port),
        "thumb_height": int(thumbs["height"]),
        "log_level": str(logging_cfg["level"]).upper(),
        "json_logs": bool(logging_cfg["json"]),
    }
    values.update({k: v for k, v in overrides.items() if v is not None})

    values["media_root"] = _resolve(values["media_root"])
    if values["logs_dir"]:
        values["logs_dir"] = _resolve(values["logs_dir"])
    return Settings(**values)
