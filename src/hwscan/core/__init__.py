from .configuration import (
    BaseConfigModel,
    CPUInfoModel,
    DiskInfoModel,
    GPUInfoModel,
    HardwareSnapshotModel,
    HwscanConfig,
    MemoryInfoModel,
    MemoryModuleModel,
    MotherboardInfoModel,
    load_config,
)
from .exceptions import ConfigurationError, HardwareDetectionError, HwscanError, SourceUnavailableError
from .instrumentation.scanner import HardwareScanner
from .orchestration.orchestrator import Orchestrator

__all__ = [
    # From configuration
    "BaseConfigModel",
    "CPUInfoModel",
    "DiskInfoModel",
    "GPUInfoModel",
    "HardwareSnapshotModel",
    "HwscanConfig",
    "MemoryInfoModel",
    "MemoryModuleModel",
    "MotherboardInfoModel",
    "load_config",
    # From exceptions
    "ConfigurationError",
    "HardwareDetectionError",
    "HwscanError",
    "SourceUnavailableError",
    # From instrumentation
    "HardwareScanner",
    # From orchestration
    "Orchestrator",
]
