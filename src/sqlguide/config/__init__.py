"""Configuration package for the SQL study guide."""

from sqlguide.config.app_config import (
    AppConfig,
    ContentConfig,
    SearchConfig,
    clear_config_cache,
    load_app_config,
)

__all__ = [
    "AppConfig",
    "ContentConfig",
    "SearchConfig",
    "clear_config_cache",
    "load_app_config",
]
