"""Unit tests for ViewerViewModel."""

from __future__ import annotations

import tempfile
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from dv_common.api import ViewerSettings
from dv_common.errors import NoBytecodeEntry
from dv_core.session import APP_TITLE
from dv_core.tree import NodeKind
from tests.helpers.sample_model import FakeParser, write_apk


pytestmark = pytest.mark.unit_gui


class SignalRecorder:
    """Collects emissions of every viewmodel signal."""

    def __init__(self, vm) -> None:
        self.titles: list[str] = []
        self.languages: list[tuple[list, str]] = []
        self.trees: list[tuple] = []
        self.documents: list = []
        self.errors: list[str] = []
        vm.title_changed.connect(self.titles.append)
        vm.languages_changed.connect(lambda names, current: self.languages.append((names, current)))
        vm.tree_changed.connect(self.trees.append)
        vm.document_changed.connect(self.documents.append)
        vm.error_occurred.connect(self.errors.append)


def _find(nodes, kind: NodeKind, label: str):
    for root in nodes:
        for node in root.walk():
            if node.kind is kind and node.label == label:
                return node
    raise AssertionError(f"{kind.value} {label} not in tree")


class TestViewerViewModel:
    """Tests for ViewerViewModel."""

    @pytest.fixture
    def temp_dir(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
        path = tmp_path / "extract"
        path.mkdir()
        monkeypatch.setattr(tempfile, "tempdir", str(path))
        return path

    @pytest.fixture
    def parser(self) -> FakeParser:
        return FakeParser()

    @pytest.fixture
    def session_service(self, parser: FakeParser):
        from dv_gui.services import ParserService, SessionService

        return SessionService(ParserService(parser), ViewerSettings())

    @pytest.fixture
    def vm(self, session_service):
        from dv_gui.viewmodels import ViewerViewModel

        return ViewerViewModel(session_service)

    def test_initial_state(self, vm) -> None:
        """Test initial viewmodel state."""
        assert vm.session is None
        assert vm.title == APP_TITLE
        assert vm.languages == []
        assert vm.current_language == ""
        assert vm.document.is_empty

    def test_open_file_emits_state(self, vm, tmp_path: Path, temp_dir: Path) -> None:
        recorder = SignalRecorder(vm)

        assert vm.open_file(write_apk(tmp_path / "app.apk")) is True

        assert recorder.titles == [f"{APP_TITLE} - app.apk"]
        assert recorder.languages == [(["Java", "Dex"], "Java")]
        assert len(recorder.trees) == 1
        assert recorder.documents[-1].is_empty
        assert recorder.errors == []
        assert len(list(temp_dir.iterdir())) == 1

    def test_open_failure_keeps_previous_session(
        self, vm, tmp_path: Path, temp_dir: Path
    ) -> None:
        vm.open_file(write_apk(tmp_path / "app.apk"))
        previous = vm.session
        recorder = SignalRecorder(vm)

        assert vm.open_file(write_apk(tmp_path / "broken.apk", with_dex=False)) is False

        assert vm.session is previous
        assert len(recorder.errors) == 1
        assert "broken.apk" in recorder.errors[0]
        assert "NoBytecodeEntry" in recorder.errors[0]

    def test_open_replaces_and_closes_previous(
        self, vm, parser: FakeParser, tmp_path: Path, temp_dir: Path
    ) -> None:
        vm.open_file(write_apk(tmp_path / "one.apk"))
        vm.open_file(write_apk(tmp_path / "two.apk"))

        assert parser.models[0].disposed
        assert not parser.models[1].disposed
        assert vm.title == f"{APP_TITLE} - two.apk"
        assert len(list(temp_dir.iterdir())) == 1

    def test_select_nodes(self, vm, tmp_path: Path, temp_dir: Path) -> None:
        vm.open_file(write_apk(tmp_path / "app.apk"))
        recorder = SignalRecorder(vm)
        nodes = vm.session.tree.visible_nodes()

        vm.select_node(_find(nodes, NodeKind.CLASS, "Foo"))
        assert "public final class Foo" in recorder.documents[-1].text

        vm.select_node(_find(nodes, NodeKind.METHOD, "bar(int)"))
        assert recorder.documents[-1].text.count("public int bar(int value)") == 1

        vm.select_node(_find(nodes, NodeKind.PACKAGE, "com.example"))
        assert recorder.documents[-1].is_empty
        assert recorder.errors == []

    def test_select_language(self, vm, tmp_path: Path, temp_dir: Path) -> None:
        vm.open_file(write_apk(tmp_path / "app.apk"))
        nodes = vm.session.tree.visible_nodes()
        vm.select_node(_find(nodes, NodeKind.METHOD, "bar(int)"))
        java = vm.document
        recorder = SignalRecorder(vm)

        vm.select_language("Dex")
        assert vm.current_language == "Dex"
        assert recorder.documents[-1].text.startswith(".method public bar(I)I")

        vm.select_language("Java")
        assert recorder.documents[-1] == java

    def test_select_unknown_language_reports_error(
        self, vm, tmp_path: Path, temp_dir: Path
    ) -> None:
        vm.open_file(write_apk(tmp_path / "app.apk"))
        recorder = SignalRecorder(vm)

        vm.select_language("Kotlin")

        assert vm.current_language == "Java"
        assert len(recorder.errors) == 1
        assert "UnknownRenderer" in recorder.errors[0]

    def test_filter_hiding_selection_clears_document(
        self, vm, tmp_path: Path, temp_dir: Path
    ) -> None:
        vm.open_file(write_apk(tmp_path / "app.apk"))
        vm.select_node(_find(vm.session.tree.visible_nodes(), NodeKind.CLASS, "Foo"))
        recorder = SignalRecorder(vm)

        vm.set_filter("zzz-no-match")

        assert recorder.trees == [()]
        assert recorder.documents[-1].is_empty
        assert vm.session.pipeline.selection is None

    def test_filter_keeping_selection_keeps_document(
        self, vm, tmp_path: Path, temp_dir: Path
    ) -> None:
        vm.open_file(write_apk(tmp_path / "app.apk"))
        vm.select_node(_find(vm.session.tree.visible_nodes(), NodeKind.CLASS, "Foo"))
        before = vm.document
        recorder = SignalRecorder(vm)

        vm.set_filter("foo")

        assert recorder.documents == []
        assert vm.document == before

    def test_close_releases_session(
        self, vm, parser: FakeParser, tmp_path: Path, temp_dir: Path
    ) -> None:
        vm.open_file(write_apk(tmp_path / "app.apk"))
        recorder = SignalRecorder(vm)

        vm.close()
        vm.close()

        assert vm.session is None
        assert parser.models[0].disposed
        assert list(temp_dir.iterdir()) == []
        assert recorder.titles == [APP_TITLE]
        assert recorder.documents[-1].is_empty

    def test_open_uses_mocked_service(self) -> None:
        from dv_gui.viewmodels import ViewerViewModel

        service = MagicMock()
        service.open.side_effect = NoBytecodeEntry("no classes.dex")
        vm = ViewerViewModel(service)
        errors: list[str] = []
        vm.error_occurred.connect(errors.append)

        assert vm.open_file(Path("/apps/app.apk")) is False
        service.open.assert_called_once_with(Path("/apps/app.apk"))
        assert errors == ["Failed to open app.apk: NoBytecodeEntry: no classes.dex"]
