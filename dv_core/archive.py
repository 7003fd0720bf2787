"""Locating the bytecode container inside an application archive."""

from __future__ import annotations

import contextlib
import logging
import os
import shutil
import tempfile
import zipfile
import zlib
from dataclasses import dataclass
from pathlib import Path

from dv_common.errors import BytecodeLoadError, NoBytecodeEntry

logger = logging.getLogger(__name__)

BYTECODE_ENTRY = "classes.dex"
_COPY_CHUNK = 64 * 1024


@dataclass(frozen=True)
class BytecodeSource:
    """Path handed to the parser and the temp copy to delete afterwards."""

    path: Path
    temp_path: Path | None = None

    @property
    def is_extracted(self) -> bool:
        return self.temp_path is not None


def remove_temp_file(path: Path | None) -> bool:
    """Best-effort delete; failures are logged and never raised."""
    if path is None:
        return True
    try:
        path.unlink(missing_ok=True)
    except OSError as exc:
        logger.debug("Could not delete temp file %s: %s", path, exc)
        return False
    return True


def extract_bytecode(path: Path | str, temp_dir: Path | str | None = None) -> BytecodeSource:
    """Return where the bytecode container for ``path`` can be read.

    Zip archives must hold ``classes.dex`` at their root; its bytes are
    copied verbatim to a temp file. Anything else is taken to be a raw
    container and used in place. A damaged archive raises
    :class:`BytecodeLoadError`.
    """
    source = Path(path)
    if not source.is_file():
        raise FileNotFoundError(f"File not found: {source}")
    if not zipfile.is_zipfile(source):
        return BytecodeSource(source)

    try:
        temp_path = _copy_entry(source, temp_dir)
    except (zipfile.BadZipFile, zlib.error) as exc:
        raise BytecodeLoadError(
            f"{source.name} is not a readable archive: {exc}",
            context={"archive": source, "entry": BYTECODE_ENTRY},
            cause=exc,
        ) from exc

    logger.debug("Extracted %s from %s to %s", BYTECODE_ENTRY, source, temp_path)
    return BytecodeSource(temp_path, temp_path)


def _copy_entry(source: Path, temp_dir: Path | str | None) -> Path:
    with zipfile.ZipFile(source) as archive:
        try:
            info = archive.getinfo(BYTECODE_ENTRY)
        except KeyError:
            raise NoBytecodeEntry(
                f"{source.name} does not contain {BYTECODE_ENTRY}",
                context={"archive": source, "entry": BYTECODE_ENTRY},
            ) from None

        fd, temp_name = tempfile.mkstemp(suffix=".dex", dir=temp_dir)
        temp_path = Path(temp_name)
        try:
            with os.fdopen(fd, "wb") as out, archive.open(info) as entry:
                shutil.copyfileobj(entry, out, _COPY_CHUNK)
        except BaseException:
            with contextlib.suppress(OSError):
                temp_path.unlink()
            raise
    return temp_path
