"""Pytest configuration for dv_gui tests."""

import os
from pathlib import Path

import pytest

from tests.helpers.optional_imports import module_available

HAS_PYSIDE6 = module_available("PySide6")

# Widgets are created without a display.
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

# Skip collection of test files if GUI deps are missing.
if not HAS_PYSIDE6:
    collect_ignore = [
        path.name
        for path in Path(__file__).parent.glob("test_*.py")
        if path.name != "test_gui_dependencies.py"
    ]


@pytest.fixture(scope="session")
def qapp():
    """Shared QApplication instance."""
    from PySide6.QtWidgets import QApplication

    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    return app
