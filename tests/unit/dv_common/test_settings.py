"""Tests for viewer settings loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from dv_common.config.settings import ViewerSettings, load_logging_settings, load_settings
from dv_common.errors import ConfigurationError


pytestmark = pytest.mark.unit_common


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("DV_CONFIG", "DV_DEFAULT_LANGUAGE", "DV_FONT_SIZE", "DV_THEME", "DV_PARSER"):
        monkeypatch.delenv(name, raising=False)


def test_defaults_without_file() -> None:
    settings = load_settings()
    assert settings == ViewerSettings()
    assert settings.default_language == "Java"
    assert settings.class_options == ["annotations", "name", "details", "fields"]
    assert settings.parser is None


def test_reads_viewer_section(tmp_path: Path) -> None:
    path = tmp_path / "viewer.yaml"
    path.write_text(
        "viewer:\n"
        "  default_language: Dex\n"
        "  class_options: [name, methods]\n"
        "  font_size: 14\n"
    )

    settings = load_settings(path)

    assert settings.default_language == "Dex"
    assert settings.class_options == ["name", "methods"]
    assert settings.font_size == 14


def test_top_level_mapping_is_accepted(tmp_path: Path) -> None:
    path = tmp_path / "viewer.yaml"
    path.write_text("theme: dark\n")
    assert load_settings(path).theme == "dark"


def test_env_overrides_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    path = tmp_path / "viewer.yaml"
    path.write_text("default_language: Java\nfont_size: 10\n")
    monkeypatch.setenv("DV_CONFIG", str(path))
    monkeypatch.setenv("DV_DEFAULT_LANGUAGE", "Dex")
    monkeypatch.setenv("DV_FONT_SIZE", "18")
    monkeypatch.setenv("DV_PARSER", "androguard")

    settings = load_settings()

    assert settings.default_language == "Dex"
    assert settings.font_size == 18
    assert settings.parser == "androguard"


def test_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError, match="not found"):
        load_settings(tmp_path / "missing.yaml")


def test_invalid_yaml_raises(tmp_path: Path) -> None:
    path = tmp_path / "viewer.yaml"
    path.write_text("viewer: [unclosed\n")
    with pytest.raises(ConfigurationError, match="Invalid YAML"):
        load_settings(path)


def test_unknown_class_section_rejected(tmp_path: Path) -> None:
    path = tmp_path / "viewer.yaml"
    path.write_text("class_options: [name, bogus]\n")
    with pytest.raises(ConfigurationError) as excinfo:
        load_settings(path)
    assert "bogus" in str(excinfo.value.__cause__)


def test_font_size_bounds(tmp_path: Path) -> None:
    path = tmp_path / "viewer.yaml"
    path.write_text("font_size: 200\n")
    with pytest.raises(ConfigurationError):
        load_settings(path)



def test_env_font_size_must_be_integer(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DV_FONT_SIZE", "twelve")
    with pytest.raises(ConfigurationError, match="Invalid viewer settings"):
        load_settings()


@pytest.mark.parametrize(
    ("value", "expected"),
    [("1", True), ("Yes", True), (" on ", True), ("off", False), ("maybe", False), (None, False)],
)
def test_log_json_flag(monkeypatch: pytest.MonkeyPatch, value, expected) -> None:
    if value is None:
        monkeypatch.delenv("DV_LOG_JSON", raising=False)
    else:
        monkeypatch.setenv("DV_LOG_JSON", value)
    assert load_logging_settings().json_output is expected


def test_logging_settings_from_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("DV_LOG_LEVEL", "  ")
    monkeypatch.setenv("DV_LOG_FILE", str(tmp_path / "viewer.log"))

    options = load_logging_settings()

    assert options.level is None
    assert options.file == tmp_path / "viewer.log"
