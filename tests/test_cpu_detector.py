"""
Tests for CPU detection.
"""

import pytest

from hwscan.core.exceptions import HardwareDetectionError
from hwscan.core.instrumentation.cpu import CPUDetector, parse_cpuinfo

from .conftest import CPUINFO


class TestParseCpuinfo:
    def test_first_processor_wins(self):
        cpu = parse_cpuinfo(CPUINFO.splitlines())
        assert cpu.model == "Intel(R) Core(TM) i5-8400 CPU @ 2.80GHz"
        assert cpu.vendor == "GenuineIntel"
        assert cpu.cache_size == "9216 KB"
        assert cpu.speed_mhz == pytest.approx(800.012)
        assert cpu.flags == ["fpu", "vme", "sse", "sse2", "avx", "avx2"]

    def test_cores_from_distinct_core_ids(self):
        cpu = parse_cpuinfo(CPUINFO.splitlines())
        assert cpu.threads == 4
        assert cpu.cores == 2

    def test_cores_fall_back_to_threads_without_core_ids(self):
        lines = ["processor : 0", "model name : ARMv8", "", "processor : 1", "model name : ARMv8"]
        cpu = parse_cpuinfo(lines)
        assert cpu.threads == 2
        assert cpu.cores == 2

    def test_threads_never_below_cores(self):
        lines = ["processor : 0", "core id : 0", "core id : 1", "core id : 2"]
        cpu = parse_cpuinfo(lines)
        assert cpu.threads >= cpu.cores

    def test_empty_input(self):
        cpu = parse_cpuinfo([])
        assert cpu.threads == 0
        assert cpu.cores == 0
        assert cpu.flags == []


class TestCPUDetector:
    def test_max_frequency_overrides_current(self, fake_system):
        fake_system.write("proc/cpuinfo", CPUINFO)
        fake_system.write("sys/devices/system/cpu/cpu0/cpufreq/cpuinfo_max_freq", "4000000\n")

        cpu = CPUDetector(fake_system.sources()).detect()
        assert cpu.speed_mhz == pytest.approx(4000.0)

    def test_scaling_max_freq_is_second_choice(self, fake_system):
        fake_system.write("proc/cpuinfo", CPUINFO)
        fake_system.write("sys/devices/system/cpu/cpu0/cpufreq/scaling_max_freq", "3600000\n")

        cpu = CPUDetector(fake_system.sources()).detect()
        assert cpu.speed_mhz == pytest.approx(3600.0)

    def test_missing_cpufreq_keeps_descriptor_speed(self, fake_system):
        fake_system.write("proc/cpuinfo", CPUINFO)

        cpu = CPUDetector(fake_system.sources()).detect()
        assert cpu.speed_mhz == pytest.approx(800.012)

    def test_unreadable_descriptor_is_fatal(self, fake_system):
        with pytest.raises(HardwareDetectionError) as exc_info:
            CPUDetector(fake_system.sources()).detect()
        assert exc_info.value.facet == "CPU"
