"""
Module hwscan.core.configuration.hardware_schema
------------------------------------------------

This module contains the hardware snapshot schemas. Field names are the stable
JSON contract shared by the exporter and the HTTP server.
"""

from typing import Annotated

from pydantic import ConfigDict, Field, NonNegativeInt, StrictStr

from .base_config import BaseConfigModel

BYTES_PER_GB = 1024**3
BYTES_PER_MB = 1024**2


class HardwareRecordModel(BaseConfigModel):
    """
    Base class for the immutable records that make up a hardware snapshot.
    """

    model_config = ConfigDict(frozen=True)

    def to_dict(self):
        return super().to_dict()

    def to_json(self, indent: int | None = None):
        return super().to_json(indent=indent)


class CPUInfoModel(HardwareRecordModel):
    """
    Model representing the CPU information.
    """

    model: StrictStr = Field(default="", description="Processor model name")
    vendor: StrictStr = Field(default="", description="Processor vendor identifier")
    cores: NonNegativeInt = Field(default=0, description="Number of physical cores")
    threads: NonNegativeInt = Field(default=0, description="Number of logical processors")
    speed_mhz: Annotated[float, Field(default=0.0, ge=0, description="Clock speed in MHz")]
    cache_size: StrictStr = Field(default="", description="Cache size as reported by the kernel")
    flags: list[StrictStr] = Field(default_factory=list, description="CPU feature flags")


class MemoryModuleModel(HardwareRecordModel):
    """
    Model representing a single physical memory module.
    """

    size: StrictStr = Field(default="", description="Module size (e.g. 8 GB)")
    type: StrictStr = Field(default="", description="Memory type (DDR4, DDR5, ...)")
    speed: StrictStr = Field(default="", description="Module speed")
    locator: StrictStr = Field(default="", description="Physical slot (DIMM1, ...)")
    manufacturer: StrictStr = Field(default="", description="Module manufacturer")
    part_number: StrictStr = Field(default="", description="Module part number")


class MemoryInfoModel(HardwareRecordModel):
    """
    Model representing the memory information.
    """

    total_gb: Annotated[float, Field(default=0.0, ge=0, description="Total memory in GB")]
    total_bytes: NonNegativeInt = Field(default=0, description="Total memory in bytes")
    modules: list[MemoryModuleModel] = Field(default_factory=list, description="Installed memory modules")

    @property
    def ram_mb(self) -> int:
        return self.total_bytes // BYTES_PER_MB


class MotherboardInfoModel(HardwareRecordModel):
    """
    Model representing the motherboard and BIOS identification.
    """

    manufacturer: StrictStr = Field(default="", description="Board manufacturer")
    product: StrictStr = Field(default="", description="Board product name")
    version: StrictStr = Field(default="", description="Board version")
    serial_number: StrictStr = Field(default="", description="Board serial number")
    bios_vendor: StrictStr = Field(default="", description="BIOS vendor")
    bios_version: StrictStr = Field(default="", description="BIOS version")
    bios_date: StrictStr = Field(default="", description="BIOS release date")


class GPUInfoModel(HardwareRecordModel):
    """
    Model representing a graphics adapter.
    """

    vendor: StrictStr = Field(default="Unknown", description="NVIDIA, AMD, Intel or Unknown")
    model: StrictStr = Field(default="", description="Adapter description")
    pci_address: StrictStr = Field(default="", description="PCI bus address")
    driver: StrictStr = Field(default="", description="Kernel driver bound to the device")
    memory_size: StrictStr = Field(default="", description="VRAM size (e.g. 8 GB), empty if unknown")


class DiskInfoModel(HardwareRecordModel):
    """
    Model representing a physical block device.
    """

    name: StrictStr = Field(..., description="Kernel device name (sda, nvme0n1)")
    model: StrictStr = Field(default="", description="Disk model")
    vendor: StrictStr = Field(default="", description="Disk vendor")
    size_gb: Annotated[float, Field(default=0.0, ge=0, description="Size in GB")]
    size_bytes: NonNegativeInt = Field(default=0, description="Size in bytes")
    type: StrictStr = Field(default="", description="NVMe SSD, SSD, HDD or empty if unknown")


class HardwareSnapshotModel(HardwareRecordModel):
    """
    Model representing a complete point-in-time hardware snapshot.
    """

    machine_id: StrictStr = Field(default="", description="Stable machine identifier")
    cpu: CPUInfoModel = Field(..., description="CPU information")
    memory: MemoryInfoModel = Field(..., description="Memory information")
    motherboard: MotherboardInfoModel = Field(default_factory=MotherboardInfoModel, description="Motherboard information")
    gpu: list[GPUInfoModel] = Field(default_factory=list, description="Graphics adapters")
    disks: list[DiskInfoModel] = Field(default_factory=list, description="Physical disks")
    timestamp: StrictStr = Field(..., description="Capture time (ISO-8601)")

    @property
    def has_gpu(self) -> bool:
        return len(self.gpu) > 0

    @property
    def total_disk_bytes(self) -> int:
        return sum(d.size_bytes for d in self.disks)
