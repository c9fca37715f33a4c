"""
Module core.instrumentation
---------------------------

This module contains the hardware detection pipeline of HWSCAN.
"""

from .cpu import CPUDetector
from .disk import DiskDetector
from .gpu import GPUDetector
from .machine_id import MachineIdentityResolver
from .memory import MemoryDetector
from .motherboard import MotherboardDetector
from .scanner import HardwareScanner
from .sources import NetworkInterface, SystemSources
from .vram import VRAMResolver

__all__ = [
    "CPUDetector",
    "DiskDetector",
    "GPUDetector",
    "HardwareScanner",
    "MachineIdentityResolver",
    "MemoryDetector",
    "MotherboardDetector",
    "NetworkInterface",
    "SystemSources",
    "VRAMResolver",
]
