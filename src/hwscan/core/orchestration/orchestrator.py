"""
Module core.orchestration.orchestrator
--------------------------------------

This module defines the Orchestrator class, the central component responsible
for coordinating the main operations of HWSCAN: scanning, exporting and
serving the hardware snapshot.
"""

import logging
from pathlib import Path

from ..configuration import HardwareSnapshotModel, HwscanConfig
from ..exceptions import HwscanError
from ..export import SnapshotExporter, export_to_json
from ..instrumentation import HardwareScanner, SystemSources


class Orchestrator:
    """
    Main orchestrator class for HWSCAN.

    This class coordinates the execution of the different system components.
    """

    def __init__(self, config: HwscanConfig | None = None, sources: SystemSources | None = None, logger_name: str = "app.orchestrator"):
        """
        Initialize the orchestrator instance.

        Args:
            config (HwscanConfig | None): Runtime configuration.
            sources (SystemSources | None): Source access override (tests).
            logger_name (str): Name of the logger to be used for this component.
        """
        self.logger = logging.getLogger(logger_name)
        self.config = config or HwscanConfig()

        self.hardware_scanner = HardwareScanner(sources=sources or SystemSources(self.config))
        self.logger.debug("Hardware scanner component ready")
        self.exporter = SnapshotExporter(self.config.export)
        self.logger.debug("Snapshot exporter component ready")
        self.logger.info("Orchestrator successfully initialized")

    def execute_hardware_scan(self) -> HardwareSnapshotModel | None:
        """
        Perform a hardware scan of the system and log a summary.

        Returns:
            HardwareSnapshotModel | None: The finalized snapshot, or None if a
            mandatory facet could not be detected.
        """
        self.logger.info("=" * 40)
        self.logger.info("Starting hardware scan")
        self.logger.info("=" * 40)

        try:
            snapshot = self.hardware_scanner.scan()
        except HwscanError as e:
            self.logger.error("=" * 40)
            self.logger.error(f"CRITICAL ERROR during hardware scan: {e}")
            self.logger.error("=" * 40, exc_info=True)
            return None

        self.logger.info(f"Machine ID: {snapshot.machine_id}")

        cpu = snapshot.cpu
        self.logger.info(f"CPU: {cpu.model or 'Unknown'}")
        self.logger.debug(f"  Cores: {cpu.cores} physical, {cpu.threads} threads")
        if cpu.speed_mhz:
            self.logger.debug(f"  Speed: {cpu.speed_mhz:.0f} MHz")

        self.logger.info(f"Memory: {snapshot.memory.total_gb:.2f} GB total")
        for i, module in enumerate(snapshot.memory.modules, 1):
            self.logger.debug(f"  Module {i}: {module.size} {module.type} {module.speed} {module.locator}".rstrip())

        board = snapshot.motherboard
        if board.manufacturer or board.product:
            self.logger.info(f"Motherboard: {board.manufacturer} {board.product}".strip())

        if snapshot.has_gpu:
            self.logger.info(f"GPUs detected: {len(snapshot.gpu)}")
            for i, gpu in enumerate(snapshot.gpu, 1):
                self.logger.info(f"  GPU {i}: {gpu.vendor} {gpu.model}")
                if gpu.memory_size:
                    self.logger.debug(f"    VRAM: {gpu.memory_size}")
        else:
            self.logger.info("No GPUs detected")

        if snapshot.disks:
            self.logger.debug(f"Storage devices: {len(snapshot.disks)}")
            for i, disk in enumerate(snapshot.disks, 1):
                self.logger.debug(f"  Disk {i} ({disk.name}): {disk.size_gb:.1f} GB {disk.type}")

        self.logger.info("=" * 40)
        self.logger.info("Hardware scan report generated successfully")
        self.logger.info("=" * 40)
        return snapshot

    def export_snapshot(self, snapshot: HardwareSnapshotModel, output_path: str | Path | None = None) -> tuple[Path, bool] | None:
        """
        Export the snapshot to JSON.

        Args:
            snapshot (HardwareSnapshotModel): Snapshot to export.
            output_path (str | Path | None): Explicit destination; automatic if None.

        Returns:
            tuple[Path, bool] | None: Written path and whether it is removable
            media, or None if the export failed.
        """
        try:
            if output_path is not None:
                return export_to_json(snapshot, output_path), False
            return self.exporter.auto_export(snapshot)
        except OSError as e:
            self.logger.warning(f"Could not export hardware snapshot: {e}")
            return None
