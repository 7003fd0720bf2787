"""Console entrypoint for the GUI (dexview gui)."""

from __future__ import annotations

import sys
from pathlib import Path


def main(argv: list[str] | None = None, config_path: Path | None = None) -> int:
    """Launch the GUI application, optionally opening a file."""
    args = list(sys.argv if argv is None else argv)

    # Configure logging before anything else
    from dv_common.api import ConfigurationError, configure_logging, load_settings
    from dv_common.errors import describe_error

    configure_logging()
    try:
        settings = load_settings(config_path)
    except ConfigurationError as exc:
        print(describe_error(exc), file=sys.stderr)
        return 1

    # Import Qt after logging is configured
    from PySide6.QtWidgets import QApplication

    from dv_gui.app import create_app
    from dv_gui.resources.theme import apply_theme, get_preferred_theme

    app = QApplication.instance() or QApplication(args)
    app.setApplicationName("Dex Viewer")
    app.setOrganizationName("dex-viewer")

    apply_theme(app, get_preferred_theme(settings.theme))

    window = create_app(settings)
    window.show()
    if len(args) > 1:
        window.open_file(Path(args[1]))

    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
