"""
Module hwscan.core.instrumentation.gpu
--------------------------------------

GPU detection from the plain `lspci` listing.
"""

import logging
import re

from ..configuration import GPUInfoModel
from .sources import SystemSources
from .vram import VRAMResolver, normalize_pci_address

CONTROLLER_CLASSES = ("VGA compatible controller", "3D controller", "Display controller")

UNKNOWN_VENDOR = "Unknown"

_VENDOR_PATTERNS = (
    (re.compile(r"nvidia", re.IGNORECASE), "NVIDIA"),
    (re.compile(r"amd|\bati\b", re.IGNORECASE), "AMD"),
    (re.compile(r"intel", re.IGNORECASE), "Intel"),
)


def classify_vendor(description: str) -> str:
    for pattern, vendor in _VENDOR_PATTERNS:
        if pattern.search(description):
            return vendor
    return UNKNOWN_VENDOR


def parse_lspci_line(line: str) -> tuple[str, str] | None:
    """
    Split a controller line into PCI address and description.

    Returns:
        tuple[str, str] | None: `(address, description)` for display
        controllers, None for any other line.
    """
    if not any(cls in line for cls in CONTROLLER_CLASSES):
        return None
    parts = line.strip().split(" ", 1)
    if len(parts) < 2:
        return None
    return parts[0].strip(), parts[1].strip()


def model_from_description(description: str) -> str:
    """The text after the first colon, or the whole description."""
    idx = description.find(":")
    if idx > 0:
        return description[idx + 1 :].strip()
    return description


class GPUDetector:
    """
    Detector for the GPU facet.

    Attributes:
        sources (SystemSources): Source access capability.
        vram (VRAMResolver): Fallback chain used for graphics memory.
        logger (logging.Logger): Logger instance for debug reporting.
    """

    def __init__(self, sources: SystemSources, vram: VRAMResolver | None = None, logger_name: str = "app.scanner.gpu"):
        self.sources = sources
        self.vram = vram or VRAMResolver(sources)
        self.logger = logging.getLogger(logger_name)

    def detect(self) -> list[GPUInfoModel]:
        """
        Detect graphics adapters.

        Returns:
            list[GPUInfoModel]: Detected GPUs, empty if lspci is unavailable.
        """
        output = self.sources.run([self.sources.commands.lspci])
        if output is None:
            self.logger.warning("lspci unavailable; skipping GPU detection")
            return []

        gpus: list[GPUInfoModel] = []
        for line in output.splitlines():
            parsed = parse_lspci_line(line)
            if parsed is None:
                continue
            address, description = parsed
            gpu = GPUInfoModel(
                vendor=classify_vendor(description),
                model=model_from_description(description),
                pci_address=address,
                driver=self.driver_for(address),
                memory_size=self.vram.resolve(address),
            )
            gpus.append(gpu)
            self.logger.debug(f"GPU detected: {gpu.vendor} {gpu.model} at {address} (VRAM: {gpu.memory_size or 'unknown'})")

        if not gpus:
            self.logger.debug("No GPUs detected")
        return gpus

    def driver_for(self, address: str) -> str:
        """Name of the kernel driver bound to the PCI device, or empty."""
        link = self.sources.sys_path("bus", "pci", "devices", normalize_pci_address(address), "driver")
        resolved = self.sources.resolve(link)
        return resolved.name if resolved is not None else ""
