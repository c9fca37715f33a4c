from .app_config import (
    ExportConfig,
    HwscanConfig,
    LoggingConfig,
    ServerConfig,
    SourcePathsConfig,
    ToolCommandsConfig,
    load_config,
)
from .base_config import BaseConfigModel
from .hardware_schema import (
    BYTES_PER_GB,
    BYTES_PER_MB,
    CPUInfoModel,
    DiskInfoModel,
    GPUInfoModel,
    HardwareSnapshotModel,
    MemoryInfoModel,
    MemoryModuleModel,
    MotherboardInfoModel,
)

__all__ = [
    "BaseConfigModel",
    "BYTES_PER_GB",
    "BYTES_PER_MB",
    "CPUInfoModel",
    "DiskInfoModel",
    "GPUInfoModel",
    "HardwareSnapshotModel",
    "MemoryInfoModel",
    "MemoryModuleModel",
    "MotherboardInfoModel",
    "ExportConfig",
    "HwscanConfig",
    "LoggingConfig",
    "ServerConfig",
    "SourcePathsConfig",
    "ToolCommandsConfig",
    "load_config",
]
