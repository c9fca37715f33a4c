"""
Module hwscan.core.instrumentation.scanner
------------------------------------------

This module defines the `HardwareScanner` class, responsible for sequencing
the facet detectors and assembling the hardware snapshot. The machine
identifier is derived last because it hashes the other facets.
"""

import logging
from collections.abc import Callable
from datetime import datetime
from typing import TypeVar

from ..configuration import HardwareSnapshotModel, HwscanConfig, MotherboardInfoModel
from .cpu import CPUDetector
from .disk import DiskDetector
from .gpu import GPUDetector
from .machine_id import MachineIdentityResolver
from .memory import MemoryDetector
from .motherboard import MotherboardDetector
from .sources import SystemSources

T = TypeVar("T")


def capture_timestamp() -> str:
    """Local time in ISO-8601 with UTC offset, second precision."""
    return datetime.now().astimezone().isoformat(timespec="seconds")


class HardwareScanner:
    """
    Hardware scanner for system inspection.

    Attributes:
        sources (SystemSources): Source access capability shared by the detectors.
        logger (logging.Logger): Logger instance for debug and error reporting.
    """

    def __init__(
        self,
        sources: SystemSources | None = None,
        config: HwscanConfig | None = None,
        clock: Callable[[], str] = capture_timestamp,
        logger_name: str = "app.scanner",
    ):
        """
        Initialize the hardware scanner.

        Args:
            sources (SystemSources | None): Source access, built from `config` if None.
            config (HwscanConfig | None): Runtime configuration.
            clock (Callable[[], str]): Source of the capture timestamp.
            logger_name (str): Name of the logger for this component.
        """
        self.sources = sources or SystemSources(config)
        self.clock = clock
        self.logger = logging.getLogger(logger_name)

        self.cpu_detector = CPUDetector(self.sources)
        self.memory_detector = MemoryDetector(self.sources)
        self.motherboard_detector = MotherboardDetector(self.sources)
        self.gpu_detector = GPUDetector(self.sources)
        self.disk_detector = DiskDetector(self.sources)
        self.identity_resolver = MachineIdentityResolver(self.sources)

    def scan(self) -> HardwareSnapshotModel:
        """
        Perform a full hardware scan.

        Returns:
            HardwareSnapshotModel: Finalized snapshot including the machine ID.

        Raises:
            HardwareDetectionError: If the CPU or memory summary cannot be read.
        """
        self.logger.info("Starting full hardware scan")
        timestamp = self.clock()

        self.logger.debug("Collecting CPU information")
        cpu = self.cpu_detector.detect()

        self.logger.debug("Collecting memory information")
        memory = self.memory_detector.detect()

        self.logger.debug("Collecting motherboard information")
        motherboard = self._advisory("motherboard", self.motherboard_detector.detect, MotherboardInfoModel)

        self.logger.debug("Collecting GPU information")
        gpus = self._advisory("GPU", self.gpu_detector.detect, list)

        self.logger.debug("Collecting disk information")
        disks = self._advisory("disk", self.disk_detector.detect, list)

        snapshot = HardwareSnapshotModel(
            cpu=cpu,
            memory=memory,
            motherboard=motherboard,
            gpu=gpus,
            disks=disks,
            timestamp=timestamp,
        )

        self.logger.debug("Deriving machine identifier")
        machine_id = self.identity_resolver.resolve(snapshot)
        snapshot = snapshot.model_copy(update={"machine_id": machine_id})

        self.logger.info(f"Hardware scan completed (machine ID {machine_id})")
        return snapshot

    def _advisory(self, facet: str, detect: Callable[[], T], default: Callable[[], T]) -> T:
        try:
            return detect()
        except Exception as e:
            self.logger.warning(f"Error detecting {facet}, continuing without it: {e}", exc_info=True)
            return default()
