"""Application configuration loader.

Loads configuration from data/config/app_config_v1.yaml (or the file
named by SQLGUIDE_CONFIG) with fallback to built-in defaults.

Usage:
    from sqlguide.config.app_config import load_app_config

    config = load_app_config()
    paths = config.content.guide_paths()
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import structlog
import yaml

logger = structlog.get_logger(__name__)

# Config file path (relative to project root)
CONFIG_FILE = Path("data/config/app_config_v1.yaml")
CONFIG_ENV_VAR = "SQLGUIDE_CONFIG"

# Guides shipped with the package
PACKAGED_GUIDES_DIR = Path(__file__).parent.parent / "content" / "guides"


@dataclass
class ContentConfig:
    """Where the study guides live."""

    guides_dir: str | None = None
    primary: str = "sql_study_guide.md"
    secondary: str | None = "sql_study_guide_revised.md"

    def get_guides_dir(self) -> Path:
        """Configured guides directory, or the packaged one."""
        if self.guides_dir:
            return Path(self.guides_dir).expanduser()
        return PACKAGED_GUIDES_DIR

    def guide_paths(self) -> tuple[Path, Path | None]:
        """Resolve (primary, secondary) guide paths."""
        base = self.get_guides_dir()
        secondary = base / self.secondary if self.secondary else None
        return base / self.primary, secondary


@dataclass
class SearchConfig:
    """Display settings for search results."""

    max_results: int = 20


@dataclass
class AppConfig:
    """Application-wide configuration."""

    content: ContentConfig = field(default_factory=ContentConfig)
    search: SearchConfig = field(default_factory=SearchConfig)


# Module-level cache
_cached_config: AppConfig | None = None


def _get_defaults() -> dict[str, Any]:
    """Get default configuration values."""
    return {
        "content": {
            "guides_dir": None,
            "primary": "sql_study_guide.md",
            "secondary": "sql_study_guide_revised.md",
        },
        "search": {
            "max_results": 20,
        },
    }


def _parse_config(data: dict[str, Any]) -> AppConfig:
    """Parse configuration dictionary into AppConfig object."""
    defaults = _get_defaults()

    content_data = {**defaults["content"], **(data.get("content") or {})}
    content = ContentConfig(
        guides_dir=content_data.get("guides_dir"),
        primary=content_data.get("primary") or defaults["content"]["primary"],
        secondary=content_data.get("secondary"),
    )

    search_data = {**defaults["search"], **(data.get("search") or {})}
    try:
        max_results = int(search_data.get("max_results", 20))
    except (TypeError, ValueError):
        logger.warning("invalid_max_results", value=search_data.get("max_results"))
        max_results = defaults["search"]["max_results"]
    if max_results < 1:
        logger.warning("invalid_max_results", value=max_results)
        max_results = defaults["search"]["max_results"]

    return AppConfig(content=content, search=SearchConfig(max_results=max_results))


def get_config_path() -> Path:
    """Config file path, honouring the SQLGUIDE_CONFIG override."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return CONFIG_FILE


def load_app_config(force_reload: bool = False) -> AppConfig:
    """Load application config, falling back to defaults.

    Args:
        force_reload: If True, ignore cached config and reload from file.

    Returns:
        AppConfig object with all settings.
    """
    global _cached_config

    if _cached_config is not None and not force_reload:
        return _cached_config

    config_path = get_config_path()
    data: dict[str, Any]

    if config_path.exists():
        logger.debug("loading_app_config", source=str(config_path))
        data = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
    else:
        logger.info("using_default_config")
        data = _get_defaults()

    _cached_config = _parse_config(data)
    return _cached_config


def clear_config_cache() -> None:
    """Clear the configuration cache.

    Useful for testing or when config is modified at runtime.
    """
    global _cached_config
    _cached_config = None
