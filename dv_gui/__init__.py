"""PySide6 desktop shell for dex-viewer."""
