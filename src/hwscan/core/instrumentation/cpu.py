"""
Module hwscan.core.instrumentation.cpu
--------------------------------------

CPU detection from the processor descriptor (`/proc/cpuinfo`) with the
maximum frequency taken from cpufreq when the kernel exposes it.
"""

import logging
from collections.abc import Iterable

from ..configuration import CPUInfoModel
from ..exceptions import HardwareDetectionError, SourceUnavailableError
from .parsing import iter_key_values
from .sources import SystemSources

CPUFREQ_FILES = ("cpuinfo_max_freq", "scaling_max_freq")


def parse_cpuinfo(lines: Iterable[str]) -> CPUInfoModel:
    """
    Build a CPU record from processor descriptor lines.

    Scalar fields keep the value of the first processor block that defines
    them. Threads count the `processor` entries; cores count the distinct
    `core id` values and fall back to the thread count when there are none.
    """
    model = vendor = cache_size = ""
    speed = 0.0
    flags: list[str] = []
    threads = 0
    core_ids: set[str] = set()

    for key, value in iter_key_values(lines):
        if key == "processor":
            threads += 1
        elif key == "model name":
            model = model or value
        elif key == "vendor_id":
            vendor = vendor or value
        elif key == "cpu MHz":
            if not speed:
                try:
                    speed = float(value)
                except ValueError:
                    pass
        elif key == "cache size":
            cache_size = cache_size or value
        elif key == "core id":
            core_ids.add(value)
        elif key == "flags":
            flags = flags or value.split()

    cores = len(core_ids) or threads
    if threads and cores > threads:
        cores = threads

    return CPUInfoModel(
        model=model,
        vendor=vendor,
        cores=cores,
        threads=threads,
        speed_mhz=speed,
        cache_size=cache_size,
        flags=flags,
    )


class CPUDetector:
    """
    Detector for the CPU facet. The processor descriptor is mandatory.

    Attributes:
        sources (SystemSources): Source access capability.
        logger (logging.Logger): Logger instance for debug and error reporting.
    """

    def __init__(self, sources: SystemSources, logger_name: str = "app.scanner.cpu"):
        self.sources = sources
        self.logger = logging.getLogger(logger_name)

    def detect(self) -> CPUInfoModel:
        """
        Detect the CPU.

        Returns:
            CPUInfoModel: Structured CPU information.

        Raises:
            HardwareDetectionError: If the processor descriptor cannot be read.
        """
        path = self.sources.proc_path("cpuinfo")
        try:
            text = self.sources.read_required(path)
        except SourceUnavailableError as e:
            self.logger.error(f"Cannot read processor descriptor: {e}")
            raise HardwareDetectionError("CPU", e) from e

        cpu = parse_cpuinfo(text.splitlines())

        max_mhz = self.max_frequency_mhz()
        if max_mhz > 0:
            self.logger.debug(f"Using maximum frequency {max_mhz} MHz instead of {cpu.speed_mhz} MHz")
            cpu = cpu.model_copy(update={"speed_mhz": max_mhz})

        self.logger.debug(f"CPU detected: {cpu.model} - {cpu.cores} cores, {cpu.threads} threads")
        return cpu

    def max_frequency_mhz(self) -> float:
        """
        Read the maximum frequency of cpu0 from cpufreq.

        Returns:
            float: Frequency in MHz, or 0.0 if cpufreq is not available.
        """
        base = self.sources.sys_path("devices", "system", "cpu", "cpu0", "cpufreq")
        for name in CPUFREQ_FILES:
            value = self.sources.read_value(base / name)
            if not value:
                continue
            try:
                return float(value) / 1000  # kHz to MHz
            except ValueError:
                self.logger.debug(f"Unexpected value in {base / name}: {value!r}")
        return 0.0
