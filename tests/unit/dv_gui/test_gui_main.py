"""Tests for the GUI entrypoint."""

from __future__ import annotations

import importlib
from pathlib import Path
from unittest.mock import MagicMock

import pytest


pytestmark = pytest.mark.unit_gui


def test_bad_config_exits_before_qt(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    gui_main_module = importlib.import_module("dv_gui.main")

    monkeypatch.setattr("dv_common.api.configure_logging", MagicMock())
    create_app = MagicMock()
    monkeypatch.setattr("dv_gui.app.create_app", create_app)

    code = gui_main_module.main(["dexview"], config_path=tmp_path / "missing.yaml")

    assert code == 1
    assert "ConfigurationError" in capsys.readouterr().err
    create_app.assert_not_called()
