"""
Module hwscan.core.instrumentation.vram
---------------------------------------

Graphics memory resolution for a GPU identified by its PCI address.

Strategies are tried in order and the first positive answer wins:

1. NVIDIA proprietary driver: `/proc/driver/nvidia/gpus/<addr>/information`
2. `nvidia-smi --query-gpu=memory.total` for the address (MiB)
3. DRM sysfs attribute `mem_info_vram_total` (amdgpu, open NVIDIA module)
4. Largest prefetchable BAR in `lspci -v`, only when >= 512 MiB, since the
   proprietary driver exposes a 256 MiB aperture that is not the VRAM size
"""

import logging
from collections.abc import Callable

from .parsing import MIB, format_size_bytes, parse_size_string
from .sources import SystemSources

MIN_BAR_BYTES = 512 * MIB

VramStrategy = Callable[[SystemSources, str], int | None]


def normalize_pci_address(address: str) -> str:
    """Add the `0000:` domain that plain lspci output omits."""
    if address.count(":") == 1:
        return "0000:" + address
    return address


def _candidates(address: str) -> list[str]:
    full = normalize_pci_address(address)
    return [full] if full == address else [full, address]


def from_nvidia_proc(sources: SystemSources, address: str) -> int | None:
    for candidate in _candidates(address):
        text = sources.read_text(sources.proc_path("driver", "nvidia", "gpus", candidate, "information"))
        if text is None:
            continue
        for line in text.splitlines():
            if line.startswith("Video Memory:"):
                size = parse_size_string(line[len("Video Memory:") :].replace(" ", ""))
                if size > 0:
                    return size
    return None


def from_nvidia_smi(sources: SystemSources, address: str) -> int | None:
    output = sources.run(
        [
            sources.commands.nvidia_smi,
            "--query-gpu=memory.total",
            "--format=csv,noheader,nounits",
            f"--id={address}",
        ]
    )
    if output is None:
        return None
    value = output.strip()
    if value.isdigit() and int(value) > 0:
        return int(value) * MIB
    return None


def from_drm_sysfs(sources: SystemSources, address: str) -> int | None:
    suffixes = tuple(_candidates(address))
    for device in sources.glob(sources.sys_path("class", "drm", "card*", "device")):
        resolved = sources.resolve(device)
        if resolved is None or not str(resolved).endswith(suffixes):
            continue
        value = sources.read_value(device / "mem_info_vram_total")
        if value and value.isdigit() and int(value) > 0:
            return int(value)
    return None


def from_pci_bars(sources: SystemSources, address: str) -> int | None:
    output = sources.run([sources.commands.lspci, "-v", "-s", address])
    if output is None:
        return None

    largest = 0
    for raw in output.splitlines():
        line = raw.strip()
        if "prefetchable" not in line or "non-prefetchable" in line:
            continue
        start = line.find("[size=")
        if start < 0:
            continue
        size_str = line[start + len("[size=") :]
        end = size_str.find("]")
        if end > 0:
            size_str = size_str[:end]
        largest = max(largest, parse_size_string(size_str))

    if largest >= MIN_BAR_BYTES:
        return largest
    return None


DEFAULT_STRATEGIES: tuple[VramStrategy, ...] = (
    from_nvidia_proc,
    from_nvidia_smi,
    from_drm_sysfs,
    from_pci_bars,
)


class VRAMResolver:
    """
    Ordered fallback chain estimating the VRAM size of a GPU.

    Attributes:
        sources (SystemSources): Source access capability.
        strategies (tuple[VramStrategy, ...]): Strategies in priority order.
    """

    def __init__(
        self,
        sources: SystemSources,
        strategies: tuple[VramStrategy, ...] = DEFAULT_STRATEGIES,
        logger_name: str = "app.scanner.vram",
    ):
        self.sources = sources
        self.strategies = strategies
        self.logger = logging.getLogger(logger_name)

    def resolve_bytes(self, address: str) -> int | None:
        for strategy in self.strategies:
            size = strategy(self.sources, address)
            if size:
                self.logger.debug(f"VRAM of {address} resolved by {strategy.__name__}: {size} bytes")
                return size
        self.logger.debug(f"VRAM of {address} could not be resolved")
        return None

    def resolve(self, address: str) -> str:
        """
        Resolve the VRAM size of the GPU at `address`.

        Returns:
            str: Formatted size (`8 GB`, `512 MB`) or empty if unknown.
        """
        size = self.resolve_bytes(address)
        return format_size_bytes(size) if size else ""
