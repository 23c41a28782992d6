from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass, field
from importlib import resources
from pathlib import Path
from typing import Optional

import yaml

logger = logging.getLogger(__name__)


@dataclass
class MapSettings:
    width: int = 10
    height: int = 10
    floor_value: int = 1
    wall_value: int = 1


@dataclass
class EditorSettings:
    # Fraction of a tile's extent treated as a wall edge band
    edge_band: float = 0.2
    # Pixel extent of one tile, for click offsets
    tile_size: int = 50


@dataclass
class StorageSettings:
    key: str = "tr_map"
    directory: Optional[str] = None

    @property
    def path(self) -> Optional[Path]:
        return Path(self.directory).expanduser() if self.directory else None


@dataclass
class Settings:
    map: MapSettings = field(default_factory=MapSettings)
    editor: EditorSettings = field(default_factory=EditorSettings)
    storage: StorageSettings = field(default_factory=StorageSettings)

    @staticmethod
    def _load_yaml(path: Path) -> dict:
        with path.open("r", encoding="utf-8") as f:
            return yaml.safe_load(f) or {}

    @classmethod
    def _deep_merge(cls, base: dict, overlay: dict) -> dict:
        merged = dict(base)
        for k, v in (overlay or {}).items():
            if isinstance(v, dict) and isinstance(base.get(k), dict):
                merged[k] = cls._deep_merge(base[k], v)
            else:
                merged[k] = v
        return merged

    @classmethod
    def _from_dict(cls, data: dict) -> "Settings":
        settings = Settings(
            map=MapSettings(**(data.get("map") or {})),
            editor=EditorSettings(**(data.get("editor") or {})),
            storage=StorageSettings(**(data.get("storage") or {})),
        )
        settings._validate()
        return settings

    def _validate(self) -> None:
        defaults = MapSettings()
        for name in ("width", "height"):
            value = getattr(self.map, name)
            if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
                logger.warning("Invalid map.%s %r; using %d", name, value, getattr(defaults, name))
                setattr(self.map, name, getattr(defaults, name))
        for name in ("floor_value", "wall_value"):
            value = getattr(self.map, name)
            if not isinstance(value, int) or isinstance(value, bool) or not 0 <= value <= 255:
                logger.warning("Invalid map.%s %r; using %d", name, value, getattr(defaults, name))
                setattr(self.map, name, getattr(defaults, name))
        band = self.editor.edge_band
        if isinstance(band, bool) or not isinstance(band, (int, float)) or not 0 < band < 0.5:
            logger.warning("Invalid editor.edge_band %r; using %s", band, EditorSettings.edge_band)
            self.editor.edge_band = EditorSettings.edge_band
        size = self.editor.tile_size
        if isinstance(size, bool) or not isinstance(size, int) or size <= 0:
            logger.warning("Invalid editor.tile_size %r; using %d", size, EditorSettings.tile_size)
            self.editor.tile_size = EditorSettings.tile_size
        if not self.storage.key:
            logger.warning("Empty storage.key; using %r", StorageSettings.key)
            self.storage.key = StorageSettings.key

    @classmethod
    def load(cls, user_path: Optional[Path] = None) -> "Settings":
        """Load settings from built-in defaults and optional user override file.

        If user_path is provided and exists, overlay values onto defaults.
        """
        try:
            with resources.files("trmap.config").joinpath("default_settings.yaml").open("r", encoding="utf-8") as f:
                default_data = yaml.safe_load(f) or {}
        except FileNotFoundError:
            logger.warning("Default settings not found; falling back to dataclass defaults.")
            default_data = dataclasses.asdict(Settings())

        user_data = {}
        if user_path is not None:
            if user_path.exists():
                user_data = cls._load_yaml(user_path)
                logger.info("Loaded user settings from %s", user_path)
            else:
                logger.warning("User settings file not found: %s", user_path)

        merged = cls._deep_merge(default_data, user_data)
        settings = cls._from_dict(merged)
        logger.debug("Settings merged: %s", settings)
        return settings

    def save(self, path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as f:
            yaml.safe_dump(dataclasses.asdict(self), f, sort_keys=False)
        logger.info("Saved settings to %s", path)
