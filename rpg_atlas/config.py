"""Configuration loader and typed config objects."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict
import os
import yaml

from rpg_atlas.layout.grid import DEFAULT_PADDING, FALLBACK_OFFSET, MAX_SEARCH_RADIUS


@dataclass(frozen=True)
class AppSection:
    name: str
    env: str


@dataclass(frozen=True)
class LayoutSection:
    padding: float
    max_search_radius: int
    fallback_offset: int
    disconnected_row_gap: int


@dataclass(frozen=True)
class TerrainSection:
    pass_through_depth: int


@dataclass(frozen=True)
class CacheSection:
    max_entries: int


@dataclass(frozen=True)
class LoggingSection:
    level: str
    json: bool


@dataclass(frozen=True)
class AtlasConfig:
    app: AppSection
    layout: LayoutSection
    terrain: TerrainSection
    cache: CacheSection
    logging: LoggingSection


def _load_env() -> None:
    """Load .env if present."""
    from dotenv import load_dotenv

    if Path(".env").exists():
        load_dotenv(dotenv_path=Path(".env"), override=False)


def _require_section(cfg: Dict[str, Any], key: str) -> Dict[str, Any]:
    if key not in cfg or not isinstance(cfg[key], dict):
        raise ValueError(f"Missing or invalid config section: {key}")
    return cfg[key]


def _build_config(data: Dict[str, Any]) -> AtlasConfig:
    app_cfg = _require_section(data, "app")
    layout_cfg = _require_section(data, "layout")
    terrain_cfg = _require_section(data, "terrain")
    cache_cfg = _require_section(data, "cache")
    logging_cfg = _require_section(data, "logging")

    # Environment overrides
    env_level = os.getenv("ATLAS_LOG_LEVEL", "")
    env_name = os.getenv("ATLAS_ENV", "")

    app = AppSection(
        name=str(app_cfg.get("name", "rpg-atlas")),
        env=env_name or str(app_cfg.get("env", "dev")),
    )

    padding = float(layout_cfg.get("padding", DEFAULT_PADDING))
    if not 0.0 <= padding < 0.5:
        raise ValueError(f"layout.padding must be in [0, 0.5): {padding}")
    layout = LayoutSection(
        padding=padding,
        max_search_radius=int(layout_cfg.get("max_search_radius", MAX_SEARCH_RADIUS)),
        fallback_offset=int(layout_cfg.get("fallback_offset", FALLBACK_OFFSET)),
        disconnected_row_gap=int(layout_cfg.get("disconnected_row_gap", 2)),
    )

    terrain = TerrainSection(
        pass_through_depth=int(terrain_cfg.get("pass_through_depth", 4)),
    )

    cache = CacheSection(
        max_entries=int(cache_cfg.get("max_entries", 32)),
    )

    logging = LoggingSection(
        level=(env_level or str(logging_cfg.get("level", "INFO"))).upper(),
        json=bool(logging_cfg.get("json", True)),
    )

    return AtlasConfig(app=app, layout=layout, terrain=terrain, cache=cache, logging=logging)


def default_config() -> AtlasConfig:
    """Return the built-in defaults without reading any file."""
    return _build_config({"app": {}, "layout": {}, "terrain": {}, "cache": {}, "logging": {}})


def load_config(config_path: str = "configs/config.yaml") -> AtlasConfig:
    """Load YAML config, apply env overrides, return typed AtlasConfig."""
    _load_env()

    path = Path(config_path)
    data = yaml.safe_load(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError("Config root must be a mapping")
    return _build_config(data)
