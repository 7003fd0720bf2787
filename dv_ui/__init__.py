"""Command-line front end for dex-viewer."""
