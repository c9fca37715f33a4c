"""
Module hwscan.core.instrumentation.disk
---------------------------------------

Physical disk detection from `/sys/block`.
"""

import logging

from ..configuration import BYTES_PER_GB, DiskInfoModel
from .parsing import MIB
from .sources import SystemSources

SECTOR_SIZE = 512
MIN_DISK_BYTES = MIB

VIRTUAL_PREFIXES = ("loop", "ram", "dm-", "zram", "sr")


def is_virtual_device(name: str) -> bool:
    return name.startswith(VIRTUAL_PREFIXES)


class DiskDetector:
    """
    Detector for the disk facet.

    Attributes:
        sources (SystemSources): Source access capability.
        logger (logging.Logger): Logger instance for debug reporting.
    """

    def __init__(self, sources: SystemSources, logger_name: str = "app.scanner.disk"):
        self.sources = sources
        self.logger = logging.getLogger(logger_name)

    def detect(self) -> list[DiskInfoModel]:
        """
        Enumerate physical block devices.

        Returns:
            list[DiskInfoModel]: Detected disks, empty if `/sys/block` is unreadable.
        """
        block_dir = self.sources.sys_path("block")
        names = self.sources.list_dir(block_dir)
        if names is None:
            self.logger.warning(f"Cannot enumerate block devices under {block_dir}")
            return []

        disks: list[DiskInfoModel] = []
        for name in names:
            if is_virtual_device(name):
                continue
            disk = self._detect_device(name)
            if disk is not None:
                disks.append(disk)
                self.logger.debug(f"Disk detected: {disk.name} - {disk.size_gb:.1f}GB {disk.type}")

        self.logger.debug(f"Total of {len(disks)} disk(s) detected")
        return disks

    def _detect_device(self, name: str) -> DiskInfoModel | None:
        base = self.sources.sys_path("block", name)

        size_bytes = 0
        sectors = self.sources.read_value(base / "size")
        if sectors and sectors.isdigit():
            size_bytes = int(sectors) * SECTOR_SIZE

        if size_bytes <= MIN_DISK_BYTES:
            self.logger.debug(f"Ignoring {name}: {size_bytes} bytes")
            return None

        model = ""
        for candidate in (base / "device" / "model", base / "device" / "name"):
            value = self.sources.read_value(candidate)
            if value is not None:
                model = value
                break

        vendor = self.sources.read_value(base / "device" / "vendor") or ""

        return DiskInfoModel(
            name=name,
            model=model,
            vendor=vendor,
            size_bytes=size_bytes,
            size_gb=size_bytes / BYTES_PER_GB,
            type=self._classify(name, base),
        )

    def _classify(self, name: str, base) -> str:
        if name.startswith("nvme"):
            return "NVMe SSD"
        rotational = self.sources.read_value(base / "queue" / "rotational")
        if rotational is None:
            return ""
        return "SSD" if rotational == "0" else "HDD"
