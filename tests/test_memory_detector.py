"""
Tests for memory detection and module parsing.
"""

import pytest

from hwscan.core.exceptions import HardwareDetectionError
from hwscan.core.instrumentation.memory import MemoryDetector, parse_meminfo_total, parse_memory_modules

from .conftest import DMIDECODE_MEMORY, MEMINFO


class TestMeminfo:
    def test_total_in_bytes(self):
        assert parse_meminfo_total(MEMINFO) == 16777216 * 1024

    def test_missing_total(self):
        assert parse_meminfo_total("MemFree: 100 kB\n") == 0


class TestModuleParsing:
    def test_installed_modules_only(self):
        modules = parse_memory_modules(DMIDECODE_MEMORY)
        assert len(modules) == 2
        assert [m.locator for m in modules] == ["ChannelA-DIMM0", "ChannelB-DIMM0"]

    def test_module_fields(self):
        module = parse_memory_modules(DMIDECODE_MEMORY)[0]
        assert module.size == "8 GB"
        assert module.type == "DDR4"
        assert module.speed == "2666 MT/s"
        assert module.manufacturer == "Kingston"
        assert module.part_number == "KHX2666C16/8G"

    def test_at_most_one_module_per_marker(self):
        assert len(parse_memory_modules(DMIDECODE_MEMORY)) <= DMIDECODE_MEMORY.count("Memory Device")

    def test_block_without_size_is_dropped(self):
        assert parse_memory_modules("Memory Device\n\tLocator: DIMM0\n\tType: DDR4\n") == []


class TestMemoryDetector:
    def test_totals(self, fake_system):
        fake_system.write("proc/meminfo", MEMINFO)
        memory = MemoryDetector(fake_system.sources()).detect()

        assert memory.total_bytes == 16777216 * 1024
        assert memory.total_gb == pytest.approx(memory.total_bytes / 2**30)
        assert memory.total_gb == pytest.approx(16.0)

    def test_modules_from_dmidecode(self, fake_system):
        fake_system.write("proc/meminfo", MEMINFO)
        fake_system.command(["dmidecode", "-t", "memory"], DMIDECODE_MEMORY)

        memory = MemoryDetector(fake_system.sources()).detect()
        assert len(memory.modules) == 2

    def test_fallback_module_when_dmidecode_unavailable(self, fake_system):
        fake_system.write("proc/meminfo", MEMINFO)
        fake_system.command(["dmidecode", "-s", "memory-type"], "DDR4\n")

        memory = MemoryDetector(fake_system.sources()).detect()
        assert len(memory.modules) == 1
        assert memory.modules[0].size == "16.0 GB"
        assert memory.modules[0].type == "DDR4"

    def test_fallback_module_kept_without_type(self, fake_system):
        fake_system.write("proc/meminfo", MEMINFO)

        memory = MemoryDetector(fake_system.sources()).detect()
        assert len(memory.modules) == 1
        assert memory.modules[0].type == ""

    def test_fallback_when_dmidecode_reports_no_modules(self, fake_system):
        fake_system.write("proc/meminfo", MEMINFO)
        fake_system.command(["dmidecode", "-t", "memory"], "Memory Device\n\tSize: No Module Installed\n")

        memory = MemoryDetector(fake_system.sources()).detect()
        assert [m.size for m in memory.modules] == ["16.0 GB"]

    def test_unreadable_summary_is_fatal(self, fake_system):
        fake_system.command(["dmidecode", "-t", "memory"], DMIDECODE_MEMORY)
        with pytest.raises(HardwareDetectionError):
            MemoryDetector(fake_system.sources()).detect()
