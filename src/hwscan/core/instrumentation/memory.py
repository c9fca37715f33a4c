"""
Module hwscan.core.instrumentation.memory
-----------------------------------------

Memory detection. Total capacity comes from `/proc/meminfo` (mandatory);
module detail comes from `dmidecode -t memory` and falls back to a single
synthetic module describing the total when the tool gives nothing.
"""

import logging

from ..configuration import BYTES_PER_GB, MemoryInfoModel, MemoryModuleModel
from ..exceptions import HardwareDetectionError, SourceUnavailableError
from .parsing import RecordBlockParser
from .sources import SystemSources

NO_MODULE_INSTALLED = "No Module Installed"

MODULE_FIELDS = {
    "Size:": "size",
    "Type:": "type",
    "Speed:": "speed",
    "Locator:": "locator",
    "Manufacturer:": "manufacturer",
    "Part Number:": "part_number",
}


def _is_installed(record: dict[str, str]) -> bool:
    size = record.get("size", "")
    return bool(size) and size != NO_MODULE_INSTALLED


MODULE_PARSER = RecordBlockParser("Memory Device", MODULE_FIELDS, accept=_is_installed)


def parse_meminfo_total(text: str) -> int:
    """Return MemTotal in bytes (the file reports kB), or 0 if absent."""
    for line in text.splitlines():
        if line.startswith("MemTotal:"):
            parts = line.split()
            if len(parts) >= 2 and parts[1].isdigit():
                return int(parts[1]) * 1024
            break
    return 0


def parse_memory_modules(text: str) -> list[MemoryModuleModel]:
    """Parse `dmidecode -t memory` output into installed modules."""
    return [MemoryModuleModel(**record) for record in MODULE_PARSER.parse(text)]


class MemoryDetector:
    """
    Detector for the memory facet.

    Attributes:
        sources (SystemSources): Source access capability.
        logger (logging.Logger): Logger instance for debug and error reporting.
    """

    def __init__(self, sources: SystemSources, logger_name: str = "app.scanner.memory"):
        self.sources = sources
        self.logger = logging.getLogger(logger_name)

    def detect(self) -> MemoryInfoModel:
        """
        Detect total memory and installed modules.

        Raises:
            HardwareDetectionError: If the memory summary cannot be read.
        """
        path = self.sources.proc_path("meminfo")
        try:
            text = self.sources.read_required(path)
        except SourceUnavailableError as e:
            self.logger.error(f"Cannot read memory summary: {e}")
            raise HardwareDetectionError("memory", e) from e

        total_bytes = parse_meminfo_total(text)
        total_gb = total_bytes / BYTES_PER_GB
        if not total_bytes:
            self.logger.warning(f"No MemTotal entry in {path}")

        modules = self.detect_modules()
        if modules:
            self.logger.debug(f"{len(modules)} memory module(s) reported by dmidecode")
        else:
            self.logger.debug("No module detail available, synthesizing a summary module")
            modules = self.fallback_modules(total_gb)

        self.logger.debug(f"RAM: {total_gb:.2f} GB total")
        return MemoryInfoModel(total_gb=total_gb, total_bytes=total_bytes, modules=modules)

    def detect_modules(self) -> list[MemoryModuleModel]:
        output = self.sources.run([self.sources.commands.dmidecode, "-t", "memory"])
        if output is None:
            self.logger.debug("dmidecode unavailable or not permitted")
            return []
        return parse_memory_modules(output)

    def fallback_modules(self, total_gb: float) -> list[MemoryModuleModel]:
        """
        Build the single synthetic module used when no detail is available.

        The type is filled from a narrower dmidecode query when possible.
        """
        if total_gb <= 0:
            return []

        memory_type = ""
        output = self.sources.run([self.sources.commands.dmidecode, "-s", "memory-type"])
        if output:
            memory_type = next((ln.strip() for ln in output.splitlines() if ln.strip() and not ln.startswith("#")), "")

        return [MemoryModuleModel(size=f"{total_gb:.1f} GB", type=memory_type)]
