"""
Pytest configuration and shared fixtures.

Detectors run against a fake /proc and /sys tree under tmp_path; external
tools are replaced by a dict-backed runner and network interfaces by a list.
"""

from pathlib import Path

import pytest

from hwscan.core.configuration import (
    CPUInfoModel,
    DiskInfoModel,
    GPUInfoModel,
    HardwareSnapshotModel,
    HwscanConfig,
    MemoryInfoModel,
    MemoryModuleModel,
    MotherboardInfoModel,
)
from hwscan.core.instrumentation.sources import NetworkInterface, SystemSources

CPUINFO = """\
processor\t: 0
vendor_id\t: GenuineIntel
model name\t: Intel(R) Core(TM) i5-8400 CPU @ 2.80GHz
cpu MHz\t\t: 800.012
cache size\t: 9216 KB
core id\t\t: 0
flags\t\t: fpu vme sse sse2 avx avx2

processor\t: 1
vendor_id\t: GenuineIntel
model name\t: Intel(R) Core(TM) i5-8400 CPU @ 2.80GHz
cpu MHz\t\t: 3900.000
cache size\t: 9216 KB
core id\t\t: 1
flags\t\t: fpu vme sse sse2 avx avx2

processor\t: 2
vendor_id\t: GenuineIntel
model name\t: Intel(R) Core(TM) i5-8400 CPU @ 2.80GHz
cpu MHz\t\t: 1200.000
cache size\t: 9216 KB
core id\t\t: 0
flags\t\t: fpu vme sse sse2 avx avx2

processor\t: 3
vendor_id\t: GenuineIntel
model name\t: Intel(R) Core(TM) i5-8400 CPU @ 2.80GHz
cpu MHz\t\t: 1300.000
cache size\t: 9216 KB
core id\t\t: 1
flags\t\t: fpu vme sse sse2 avx avx2
"""

MEMINFO = """\
MemTotal:       16777216 kB
MemFree:         8123456 kB
MemAvailable:   12000000 kB
"""

DMIDECODE_MEMORY = """\
# dmidecode 3.3
Getting SMBIOS data from sysfs.
SMBIOS 3.1.1 present.

Handle 0x003A, DMI type 16, 23 bytes
Physical Memory Array
\tLocation: System Board Or Motherboard
\tMaximum Capacity: 64 GB
\tNumber Of Devices: 2

Handle 0x003B, DMI type 17, 40 bytes
Memory Device
\tArray Handle: 0x003A
\tSize: 8 GB
\tForm Factor: DIMM
\tLocator: ChannelA-DIMM0
\tBank Locator: BANK 0
\tType: DDR4
\tType Detail: Synchronous
\tSpeed: 2666 MT/s
\tManufacturer: Kingston
\tSerial Number: 12345678
\tPart Number: KHX2666C16/8G
\tConfigured Memory Speed: 2666 MT/s

Handle 0x003C, DMI type 17, 40 bytes
Memory Device
\tArray Handle: 0x003A
\tSize: No Module Installed
\tLocator: ChannelA-DIMM1
\tType: Unknown

Handle 0x003D, DMI type 17, 40 bytes
Memory Device
\tArray Handle: 0x003A
\tSize: 8 GB
\tLocator: ChannelB-DIMM0
\tBank Locator: BANK 2
\tType: DDR4
\tSpeed: 2666 MT/s
\tManufacturer: Kingston
\tPart Number: KHX2666C16/8G
"""

LSPCI = """\
00:00.0 Host bridge: Intel Corporation 8th Gen Core Processor Host Bridge/DRAM Registers (rev 07)
00:02.0 VGA compatible controller: Intel Corporation UHD Graphics 630 (Desktop)
00:14.0 USB controller: Intel Corporation Cannon Lake PCH USB 3.1 xHCI Host Controller (rev 10)
01:00.0 VGA compatible controller: NVIDIA Corporation GP106 [GeForce GTX 1060 6GB] (rev a1)
01:00.1 Audio device: NVIDIA Corporation GP106 High Definition Audio Controller (rev a1)
03:00.0 Display controller: Advanced Micro Devices, Inc. [AMD/ATI] Navi 10 [Radeon RX 5700 XT] (rev c1)
"""

LSPCI_VERBOSE_NVIDIA = """\
01:00.0 VGA compatible controller: NVIDIA Corporation GP106 [GeForce GTX 1060 6GB] (rev a1) (prog-if 00 [VGA controller])
\tSubsystem: Micro-Star International Co., Ltd. [MSI] GP106 [GeForce GTX 1060 6GB]
\tFlags: bus master, fast devsel, latency 0, IRQ 130
\tMemory at de000000 (32-bit, non-prefetchable) [size=16M]
\tMemory at c0000000 (64-bit, prefetchable) [size=256M]
\tMemory at d0000000 (64-bit, prefetchable) [size=32M]
\tI/O ports at e000 [size=128]
\tKernel driver in use: nvidia
"""


class FakeRunner:
    """Command runner returning canned output keyed by argv."""

    def __init__(self, outputs: dict[tuple[str, ...], str] | None = None):
        self.outputs = dict(outputs or {})
        self.calls: list[tuple[str, ...]] = []

    def __call__(self, argv):
        key = tuple(argv)
        self.calls.append(key)
        return self.outputs.get(key)


class FakeSystem:
    """A fake /proc and /sys tree under a temporary directory."""

    def __init__(self, root: Path):
        self.root = root
        self.proc = root / "proc"
        self.sys = root / "sys"
        self.proc.mkdir()
        self.sys.mkdir()
        self.runner = FakeRunner()
        self.interfaces: list[NetworkInterface] = []

    def write(self, relative: str, content: str) -> Path:
        path = self.root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    def command(self, argv: list[str] | tuple[str, ...], output: str) -> None:
        self.runner.outputs[tuple(argv)] = output

    def config(self) -> HwscanConfig:
        return HwscanConfig.model_validate({"sources": {"proc_root": str(self.proc), "sys_root": str(self.sys)}})

    def sources(self) -> SystemSources:
        return SystemSources(self.config(), runner=self.runner, interfaces=lambda: list(self.interfaces))

    def add_block_device(self, name: str, sectors: str | None, model: str | None = None, vendor: str | None = None, rotational: str | None = None) -> None:
        base = f"sys/block/{name}"
        (self.root / base).mkdir(parents=True, exist_ok=True)
        if sectors is not None:
            self.write(f"{base}/size", sectors + "\n")
        if model is not None:
            self.write(f"{base}/device/model", model + "\n")
        if vendor is not None:
            self.write(f"{base}/device/vendor", vendor + "\n")
        if rotational is not None:
            self.write(f"{base}/queue/rotational", rotational + "\n")


@pytest.fixture
def fake_system(tmp_path) -> FakeSystem:
    return FakeSystem(tmp_path)


@pytest.fixture
def populated_system(fake_system) -> FakeSystem:
    """A desktop with two DIMMs, two GPUs, a SATA SSD and an NVMe drive."""
    fake_system.write("proc/cpuinfo", CPUINFO)
    fake_system.write("proc/meminfo", MEMINFO)
    fake_system.write("sys/devices/system/cpu/cpu0/cpufreq/cpuinfo_max_freq", "4000000\n")

    dmi = {
        "board_vendor": "ASUSTeK COMPUTER INC.",
        "board_name": "PRIME B360M-A",
        "board_version": "Rev X.0x",
        "board_serial": "190436752301234",
        "bios_vendor": "American Megatrends Inc.",
        "bios_version": "2401",
        "bios_date": "07/01/2019",
        "product_uuid": "4c4c4544-0032-3710-8037-b7c04f343132",
    }
    for name, value in dmi.items():
        fake_system.write(f"sys/class/dmi/id/{name}", value + "\n")

    fake_system.command(["dmidecode", "-t", "memory"], DMIDECODE_MEMORY)
    fake_system.command(["lspci"], LSPCI)

    fake_system.add_block_device("sda", "500118192", model="Samsung SSD 860", vendor="ATA", rotational="0")
    fake_system.add_block_device("nvme0n1", "1000215216", model="WDC WDS100T2B0C", rotational="0")
    fake_system.add_block_device("loop0", "409600")
    return fake_system


@pytest.fixture
def sample_snapshot() -> HardwareSnapshotModel:
    return HardwareSnapshotModel(
        machine_id="HWSCAN-4C4C4544003237108037B7C04F343132",
        cpu=CPUInfoModel(model="AMD Ryzen 7 5800X 8-Core Processor", vendor="AuthenticAMD", cores=8, threads=16, speed_mhz=4850.0, cache_size="512 KB"),
        memory=MemoryInfoModel(
            total_gb=32.0,
            total_bytes=32 * 2**30,
            modules=[MemoryModuleModel(size="16 GB", type="DDR4", speed="3200 MT/s", locator="DIMM_A2", manufacturer="G.Skill", part_number="F4-3200C16-16GVK")],
        ),
        motherboard=MotherboardInfoModel(manufacturer="Micro-Star International Co., Ltd.", product="MAG B550 TOMAHAWK [MS-7C91]", bios_vendor="American Megatrends International, LLC.", bios_version="A.40", bios_date="05/24/2021"),
        gpu=[GPUInfoModel(vendor="NVIDIA", model="NVIDIA Corporation GA104 [GeForce RTX 3070]", pci_address="2b:00.0", driver="nvidia", memory_size="8 GB")],
        disks=[DiskInfoModel(name="nvme0n1", model="Samsung SSD 980 PRO 1TB", size_gb=931.5, size_bytes=1000204886016, type="NVMe SSD")],
        timestamp="2024-05-01T10:30:00+02:00",
    )
