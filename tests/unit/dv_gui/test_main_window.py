"""Tests for MainWindow wiring."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest

from dv_common.api import ViewerSettings
from dv_core.session import APP_TITLE
from tests.helpers.sample_model import FAKE_DEX, FakeParser, write_apk


pytestmark = pytest.mark.unit_gui


@pytest.fixture
def window(qapp, monkeypatch: pytest.MonkeyPatch):
    from dv_gui.app import ServiceContainer
    from dv_gui.windows.main_window import MainWindow

    monkeypatch.delenv("DV_GUI_THEME", raising=False)
    services = ServiceContainer(ViewerSettings(theme="dark"))
    services.parser_service.set_parser(FakeParser())
    window = MainWindow(services)
    yield window
    window.close()


def test_initial_window_state(window) -> None:
    assert window.windowTitle() == APP_TITLE
    assert not window._language_combo.isEnabled()


def test_open_file_populates_widgets(window, tmp_path: Path) -> None:
    dex = tmp_path / "classes.dex"
    dex.write_bytes(FAKE_DEX)

    assert window.open_file(dex) is True

    assert window.windowTitle() == f"{APP_TITLE} - classes.dex"
    combo = window._language_combo
    assert [combo.itemText(i) for i in range(combo.count())] == ["Java", "Dex"]
    assert combo.currentText() == "Java"
    assert window._tree_view._tree.topLevelItemCount() == 3
    assert window._status_label.text() == str(dex)


def test_language_combo_rerenders(window, tmp_path: Path) -> None:
    dex = tmp_path / "classes.dex"
    dex.write_bytes(FAKE_DEX)
    window.open_file(dex)
    foo = window._tree_view._tree.topLevelItem(1).child(0)

    foo.setSelected(True)
    assert "public final class Foo" in window._code_view.toPlainText()

    window._language_combo.setCurrentText("Dex")
    assert window._code_view.toPlainText().startswith(".class public final Lcom/example/Foo;")


def test_open_error_shows_message(window, tmp_path: Path) -> None:
    broken = write_apk(tmp_path / "broken.apk", with_dex=False)

    with patch("dv_gui.windows.main_window.QMessageBox.warning") as warning:
        assert window.open_file(broken) is False

    warning.assert_called_once()
    assert "NoBytecodeEntry" in window._status_label.text()
    assert window.windowTitle() == APP_TITLE


def test_close_releases_session(window, tmp_path: Path) -> None:
    dex = tmp_path / "classes.dex"
    dex.write_bytes(FAKE_DEX)
    window.open_file(dex)
    window.show()

    window.close()

    assert window.viewmodel.session is None
    assert window._code_view.toPlainText() == ""


def test_open_resets_search_field(window, tmp_path: Path) -> None:
    first = tmp_path / "classes.dex"
    first.write_bytes(FAKE_DEX)
    second = write_apk(tmp_path / "other.apk")
    window.open_file(first)
    window._tree_view._search.setText("zzz-no-match")
    assert window._tree_view._tree.topLevelItemCount() == 0

    assert window.open_file(second) is True

    assert window._tree_view.filter_text == ""
    assert window.viewmodel.session.tree.filter_text == ""
    tree = window._tree_view._tree
    assert tree.topLevelItemCount() == 3
    assert not tree.topLevelItem(1).isExpanded()


def test_failed_open_keeps_search_field(window, tmp_path: Path) -> None:
    dex = tmp_path / "classes.dex"
    dex.write_bytes(FAKE_DEX)
    window.open_file(dex)
    window._tree_view._search.setText("Foo")

    with patch("dv_gui.windows.main_window.QMessageBox.warning"):
        window.open_file(write_apk(tmp_path / "broken.apk", with_dex=False))

    assert window._tree_view.filter_text == "Foo"
    assert window.viewmodel.session.tree.filter_text == "Foo"
