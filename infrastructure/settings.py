"""Settings access helpers for JSON-based configuration."""

from __future__ import annotations

from dataclasses import dataclass
import json
import os
from pathlib import Path
from typing import Any

DEFAULT_CATALOG_URL = "https://api.pokemontcg.io/v1/cards"
DEFAULT_TIMEOUT_SECONDS = 10.0
DEFAULT_THUMBNAIL_SIDE = 512

BASE_DIR = Path(__file__).resolve().parent.parent


class JsonSettings:
    """Lightweight JSON settings reader with dotted-key access."""

    def __init__(self, settings_path: str | Path) -> None:
        self._path = Path(settings_path)
        if not self._path.exists():
            raise FileNotFoundError(f"settings.json not found: {self._path}")
        with self._path.open("r", encoding="utf-8") as f:
            self._data = json.load(f)

    def get(self, key: str, default: Any | None = None) -> Any:
        """Return value for dotted `key`, or `default` if not present."""
        parts = key.split(".")
        node: Any = self._data
        for part in parts:
            if isinstance(node, dict) and part in node:
                node = node[part]
            else:
                return default
        return node


@dataclass
class AppConfig:
    """Resolved application configuration."""

    catalog_url: str = DEFAULT_CATALOG_URL
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    storage_dir: Path = Path.home() / ".picture-gallery" / "pictures"
    thumbnail_side: int = DEFAULT_THUMBNAIL_SIDE
    resources_dir: Path = BASE_DIR / "resources" / "pictures"
    log_dir: Path | None = None
    export_dir: Path = Path.home() / ".picture-gallery" / "shared"
    language: str | None = None


def _path_setting(settings: JsonSettings, key: str, default: Path) -> Path:
    raw = settings.get(key)
    if not isinstance(raw, str) or not raw:
        return default
    path = Path(os.path.expanduser(os.path.expandvars(raw)))
    if not path.is_absolute():
        path = BASE_DIR / path
    return path


def load_app_config(settings: JsonSettings) -> AppConfig:
    """Build an `AppConfig` from `settings`, falling back to defaults per key."""
    config = AppConfig()
    url = settings.get("catalog.url")
    if isinstance(url, str) and url:
        config.catalog_url = url
    try:
        config.timeout_seconds = float(
            settings.get("catalog.timeout_seconds", DEFAULT_TIMEOUT_SECONDS)
        )
    except (ValueError, TypeError):
        config.timeout_seconds = DEFAULT_TIMEOUT_SECONDS
    try:
        config.thumbnail_side = int(
            settings.get("storage.thumbnail_side", DEFAULT_THUMBNAIL_SIDE) or DEFAULT_THUMBNAIL_SIDE
        )
    except (ValueError, TypeError):
        config.thumbnail_side = DEFAULT_THUMBNAIL_SIDE
    config.storage_dir = _path_setting(settings, "storage.dir", config.storage_dir)
    config.resources_dir = _path_setting(settings, "resources.dir", config.resources_dir)
    config.export_dir = _path_setting(settings, "share.export_dir", config.export_dir)
    log_dir = settings.get("logging.dir")
    if isinstance(log_dir, str) and log_dir:
        config.log_dir = _path_setting(settings, "logging.dir", Path(log_dir))
    language = settings.get("ui.language")
    if isinstance(language, str) and language:
        config.language = language
    return config
