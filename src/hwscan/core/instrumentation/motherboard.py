"""
Module hwscan.core.instrumentation.motherboard
----------------------------------------------

Motherboard and BIOS identification from `/sys/class/dmi/id`.
"""

import logging

from ..configuration import MotherboardInfoModel
from .sources import SystemSources

DMI_FIELDS = {
    "board_vendor": "manufacturer",
    "board_name": "product",
    "board_version": "version",
    "board_serial": "serial_number",
    "bios_vendor": "bios_vendor",
    "bios_version": "bios_version",
    "bios_date": "bios_date",
}


class MotherboardDetector:
    """Detector for the motherboard facet. Every field is optional."""

    def __init__(self, sources: SystemSources, logger_name: str = "app.scanner.motherboard"):
        self.sources = sources
        self.logger = logging.getLogger(logger_name)

    def detect(self) -> MotherboardInfoModel:
        dmi_dir = self.sources.sys_path("class", "dmi", "id")
        values: dict[str, str] = {}

        for filename, field in DMI_FIELDS.items():
            value = self.sources.read_value(dmi_dir / filename)
            if value is None:
                self.logger.debug(f"DMI field unavailable: {filename}")
                continue
            values[field] = value

        board = MotherboardInfoModel(**values)
        self.logger.debug(f"Motherboard detected: {board.manufacturer} {board.product}")
        return board
