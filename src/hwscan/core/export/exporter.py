"""
Module hwscan.core.export.exporter
----------------------------------

JSON export of the hardware snapshot. Automatic export prefers the first
writable removable drive and falls back to the current directory.
"""

import getpass
import logging
import os
from datetime import datetime
from pathlib import Path

from ..configuration import ExportConfig, HardwareSnapshotModel

logger = logging.getLogger("app.export")

PROBE_FILENAME = ".hwscan_test"


def export_to_json(snapshot: HardwareSnapshotModel, output_path: str | Path) -> Path:
    """
    Write the snapshot as indented JSON.

    Raises:
        OSError: If the file cannot be written.
    """
    path = Path(output_path)
    path.write_text(snapshot.to_json(indent=2), encoding="utf-8")
    logger.info(f"Hardware snapshot exported to {path}")
    return path


def generate_filename(prefix: str = "hwscan", now: datetime | None = None) -> str:
    now = now or datetime.now()
    return f"{prefix}-{now.strftime('%Y%m%d-%H%M%S')}.json"


def is_writable_dir(directory: Path) -> bool:
    """Check writability by creating and removing a probe file."""
    probe = directory / PROBE_FILENAME
    try:
        probe.write_text("test", encoding="utf-8")
        probe.unlink()
        return True
    except OSError:
        return False


def _subdirectories(directory: Path) -> list[Path]:
    try:
        return sorted(p for p in directory.iterdir() if p.is_dir())
    except OSError:
        return []


def find_usb_mounts(mount_roots: list[str], user: str | None = None) -> list[Path]:
    """
    Find writable mount points of removable media.

    Candidates are the second-level directories under each mount root
    (`/media/<user>/<label>`, `/run/media/<user>/<label>`, ...) plus the
    children of `/media/<user>`.

    Args:
        mount_roots (list[str]): Directories where removable media is mounted.
        user (str | None): Login name, defaults to `$USER`.

    Returns:
        list[Path]: Writable mount points without duplicates.
    """
    found: list[Path] = []

    for root in mount_roots:
        for entry in _subdirectories(Path(root)):
            for mount in _subdirectories(entry):
                if mount not in found and is_writable_dir(mount):
                    found.append(mount)

    user = user if user is not None else os.environ.get("USER", "")
    if user:
        for mount in _subdirectories(Path("/media") / user):
            if mount not in found and is_writable_dir(mount):
                found.append(mount)

    return found


class SnapshotExporter:
    """
    Exporter choosing where to write the snapshot.

    Attributes:
        config (ExportConfig): Export settings.
        logger (logging.Logger): Logger instance.
    """

    def __init__(self, config: ExportConfig | None = None, logger_name: str = "app.export"):
        self.config = config or ExportConfig()
        self.logger = logging.getLogger(logger_name)

    def export_location(self) -> tuple[Path, bool]:
        """
        Return the best export directory and whether it is removable media.
        """
        mounts = find_usb_mounts(self.config.mount_roots, _current_user())
        if mounts:
            return mounts[0], True
        return Path.cwd(), False

    def auto_export(self, snapshot: HardwareSnapshotModel) -> tuple[Path, bool]:
        """
        Export to the first removable drive, or the current directory.

        Returns:
            tuple[Path, bool]: Written path and whether it is on removable media.

        Raises:
            OSError: If even the current directory is not writable.
        """
        filename = generate_filename(self.config.filename_prefix)
        directory, is_usb = self.export_location()

        if is_usb:
            try:
                return export_to_json(snapshot, directory / filename), True
            except OSError as e:
                self.logger.warning(f"Export to {directory} failed, using current directory: {e}")

        return export_to_json(snapshot, Path(filename)), False


def _current_user() -> str:
    try:
        return os.environ.get("USER") or getpass.getuser()
    except (KeyError, OSError):
        return ""


def format_export_message(path: str | Path, is_usb: bool) -> str:
    location = "removable drive" if is_usb else "current directory"
    return f"Snapshot exported to {location}\nPath: {path}\n"
