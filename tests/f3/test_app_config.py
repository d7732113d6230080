"""Tests for application configuration (F3)."""

from pathlib import Path

import pytest

from sqlguide.config.app_config import (
    AppConfig,
    PACKAGED_GUIDES_DIR,
    clear_config_cache,
    get_config_path,
    load_app_config,
)
from sqlguide.core.catalog import load_catalog


CUSTOM_GUIDE = """# Custom guide

## INNER JOIN

```sql
SELECT * FROM a INNER JOIN b ON a.id = b.a_id;
```

- Only matching rows.

**Memory Trick:** The overlap of two circles.
"""


@pytest.fixture
def custom_config(tmp_path, monkeypatch):
    """Config file pointing at a one-topic guide, no secondary guide."""
    guides = tmp_path / "guides"
    guides.mkdir()
    (guides / "custom.md").write_text(CUSTOM_GUIDE, encoding="utf-8")

    config_path = tmp_path / "app_config_v1.yaml"
    config_path.write_text(
        f"""content:
  guides_dir: {guides}
  primary: custom.md
  secondary: null
search:
  max_results: 5
""",
        encoding="utf-8",
    )
    monkeypatch.setenv("SQLGUIDE_CONFIG", str(config_path))
    clear_config_cache()
    return config_path


class TestDefaults:
    """Tests for built-in defaults."""

    def test_default_values(self):
        config = load_app_config()
        assert isinstance(config, AppConfig)
        assert config.content.guides_dir is None
        assert config.content.primary == "sql_study_guide.md"
        assert config.content.secondary == "sql_study_guide_revised.md"
        assert config.search.max_results == 20

    def test_default_paths_are_packaged(self):
        primary, secondary = load_app_config().content.guide_paths()
        assert primary == PACKAGED_GUIDES_DIR / "sql_study_guide.md"
        assert secondary == PACKAGED_GUIDES_DIR / "sql_study_guide_revised.md"
        assert primary.exists()
        assert secondary.exists()

    def test_config_is_cached(self):
        assert load_app_config() is load_app_config()

    def test_default_config_path(self):
        assert get_config_path() == Path("data/config/app_config_v1.yaml")


class TestConfigFile:
    """Tests for loading from YAML."""

    def test_env_override_path(self, custom_config):
        assert get_config_path() == custom_config

    def test_values_loaded(self, custom_config, tmp_path):
        config = load_app_config()
        assert config.content.primary == "custom.md"
        assert config.content.secondary is None
        assert config.search.max_results == 5
        primary, secondary = config.content.guide_paths()
        assert primary == tmp_path / "guides" / "custom.md"
        assert secondary is None

    def test_partial_file_keeps_defaults(self, tmp_path, monkeypatch):
        config_path = tmp_path / "partial.yaml"
        config_path.write_text("search:\n  max_results: 3\n", encoding="utf-8")
        monkeypatch.setenv("SQLGUIDE_CONFIG", str(config_path))
        clear_config_cache()

        config = load_app_config()
        assert config.search.max_results == 3
        assert config.content.primary == "sql_study_guide.md"
        assert config.content.secondary == "sql_study_guide_revised.md"

    def test_empty_file_uses_defaults(self, tmp_path, monkeypatch):
        config_path = tmp_path / "empty.yaml"
        config_path.write_text("", encoding="utf-8")
        monkeypatch.setenv("SQLGUIDE_CONFIG", str(config_path))
        clear_config_cache()

        assert load_app_config().search.max_results == 20

    def test_invalid_max_results_falls_back(self, tmp_path, monkeypatch):
        config_path = tmp_path / "bad.yaml"
        config_path.write_text("search:\n  max_results: 0\n", encoding="utf-8")
        monkeypatch.setenv("SQLGUIDE_CONFIG", str(config_path))
        clear_config_cache()

        assert load_app_config().search.max_results == 20

    @pytest.mark.parametrize("value", ["many", "[1, 2]", "null"])
    def test_non_numeric_max_results_falls_back(self, value, tmp_path, monkeypatch):
        config_path = tmp_path / "bad.yaml"
        config_path.write_text(f"search:\n  max_results: {value}\n", encoding="utf-8")
        monkeypatch.setenv("SQLGUIDE_CONFIG", str(config_path))
        clear_config_cache()

        assert load_app_config().search.max_results == 20

    def test_force_reload(self, custom_config):
        first = load_app_config()
        assert load_app_config(force_reload=True) is not first


class TestCatalogFromConfig:
    """The catalog follows the configured guides."""

    def test_custom_guide_catalog(self, custom_config):
        catalog = load_catalog()
        assert catalog.ids() == ["inner-join"]

        entry = catalog.get_by_id("inner-join")
        assert entry.title == "INNER JOIN"
        assert catalog.list_by_category("Join") == [entry]
        assert catalog.search("inner")[0] is entry
