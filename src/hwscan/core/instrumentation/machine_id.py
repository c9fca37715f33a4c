"""
Module hwscan.core.instrumentation.machine_id
---------------------------------------------

Stable machine identifier derived from a hardware snapshot.

Tiers, in priority order:

1. DMI product UUID (`HWSCAN-<UUID>`), when it is not a placeholder.
2. SHA-256 of board serial, board manufacturer, board product, CPU model and
   RAM in MB (`HWSCAN-<hash>`), when at least two components are known.
3. SHA-256 of the primary MAC address, CPU model and RAM in MB.
4. SHA-256 of the available facts salted with the capture timestamp
   (`HWSCAN-TEMP-<hash>`). This one changes on every run.

The identifier survives OS reinstalls and disk swaps. It changes when the
motherboard is replaced, and on machines without a usable UUID also when the
CPU or the total RAM changes.
"""

import hashlib
import logging
import string
from collections.abc import Callable

from ..configuration import HardwareSnapshotModel
from .sources import NetworkInterface, SystemSources

PREFIX = "HWSCAN-"
TEMP_PREFIX = "HWSCAN-TEMP-"

PLACEHOLDER_SERIALS = frozenset({"Default string", "To Be Filled By O.E.M."})
VIRTUAL_INTERFACE_MARKERS = ("docker", "veth", "br-", "vir")

_HEX_DIGITS = frozenset(string.hexdigits)

IdentityStrategy = Callable[[SystemSources, HardwareSnapshotModel], str | None]


def hash_components(components: list[str]) -> str:
    """Uppercase hex of the first 16 bytes of SHA-256 over `a|b|c`."""
    digest = hashlib.sha256("|".join(components).encode("utf-8")).digest()
    return digest[:16].hex().upper()


def normalize_uuid(uuid: str) -> str:
    return uuid.replace("-", "").replace(" ", "").strip()


def is_valid_uuid(uuid: str | None) -> bool:
    """
    Check a DMI UUID: 32 hex digits once separators are removed, and not one of
    the all-zero or all-F placeholders firmware vendors ship.
    """
    if not uuid:
        return False
    normalized = normalize_uuid(uuid).lower()
    if len(normalized) != 32:
        return False
    if normalized in ("0" * 32, "f" * 32):
        return False
    return all(c in _HEX_DIGITS for c in normalized)


def primary_mac_address(interfaces: list[NetworkInterface]) -> str:
    """MAC of the first non-loopback, non-virtual interface with a hardware address."""
    for iface in interfaces:
        if iface.is_loopback:
            continue
        mac = iface.mac.strip().lower().replace("-", ":")
        if not mac or set(mac) <= {"0", ":"}:
            continue
        name = iface.name.lower()
        if any(marker in name for marker in VIRTUAL_INTERFACE_MARKERS):
            continue
        return mac
    return ""


def from_product_uuid(sources: SystemSources, snapshot: HardwareSnapshotModel) -> str | None:
    uuid = sources.read_value(sources.sys_path("class", "dmi", "id", "product_uuid"))
    if not is_valid_uuid(uuid):
        return None
    return PREFIX + normalize_uuid(uuid).upper()


def from_hardware_descriptors(sources: SystemSources, snapshot: HardwareSnapshotModel) -> str | None:
    board = snapshot.motherboard
    components: list[str] = []

    if board.serial_number and board.serial_number not in PLACEHOLDER_SERIALS:
        components.append(board.serial_number)
    if board.manufacturer:
        components.append(board.manufacturer)
    if board.product:
        components.append(board.product)
    if snapshot.cpu.model:
        components.append(snapshot.cpu.model)
    components.append(str(snapshot.memory.ram_mb))

    if len(components) < 2:
        return None
    return PREFIX + hash_components(components)


def from_mac_address(sources: SystemSources, snapshot: HardwareSnapshotModel) -> str | None:
    mac = primary_mac_address(sources.network_interfaces())
    if not mac:
        return None

    components = [mac]
    if snapshot.cpu.model:
        components.append(snapshot.cpu.model)
    components.append(str(snapshot.memory.ram_mb))
    return PREFIX + hash_components(components)


def temporary_id(snapshot: HardwareSnapshotModel) -> str:
    components: list[str] = []
    if snapshot.cpu.model:
        components.append(snapshot.cpu.model)
    if snapshot.cpu.vendor:
        components.append(snapshot.cpu.vendor)
    components.append(str(snapshot.memory.ram_mb))
    if snapshot.motherboard.manufacturer:
        components.append(snapshot.motherboard.manufacturer)
    components.append(snapshot.timestamp)
    return TEMP_PREFIX + hash_components(components)


DEFAULT_STRATEGIES: tuple[IdentityStrategy, ...] = (
    from_product_uuid,
    from_hardware_descriptors,
    from_mac_address,
)


class MachineIdentityResolver:
    """
    Derive the machine identifier from a snapshot whose facets are populated.

    Attributes:
        sources (SystemSources): Source access capability.
        strategies (tuple[IdentityStrategy, ...]): Stable tiers in priority order.
    """

    def __init__(
        self,
        sources: SystemSources,
        strategies: tuple[IdentityStrategy, ...] = DEFAULT_STRATEGIES,
        logger_name: str = "app.scanner.identity",
    ):
        self.sources = sources
        self.strategies = strategies
        self.logger = logging.getLogger(logger_name)

    def resolve(self, snapshot: HardwareSnapshotModel) -> str:
        for strategy in self.strategies:
            machine_id = strategy(self.sources, snapshot)
            if machine_id:
                self.logger.debug(f"Machine ID derived by {strategy.__name__}")
                return machine_id

        self.logger.warning("No stable hardware identity available; using a temporary machine ID")
        return temporary_id(snapshot)
