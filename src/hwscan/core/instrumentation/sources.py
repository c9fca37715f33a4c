"""
Module hwscan.core.instrumentation.sources
------------------------------------------

This module defines `SystemSources`, the capability every detector receives to
reach kernel pseudo-files, external inventory tools and network interfaces.
Advisory reads return None on failure; only `read_required` raises.
"""

import glob
import logging
import os
import subprocess
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from pathlib import Path

import psutil

from ..configuration import HwscanConfig
from ..exceptions import SourceUnavailableError

CommandRunner = Callable[[Sequence[str]], str | None]


@dataclass(frozen=True)
class NetworkInterface:
    """A network interface as seen by the identity resolver."""

    name: str
    mac: str
    is_loopback: bool = False


def list_network_interfaces() -> list[NetworkInterface]:
    """
    Enumerate network interfaces with their hardware address.

    Returns:
        list[NetworkInterface]: Interfaces in kernel enumeration order.
    """
    stats = psutil.net_if_stats()
    interfaces: list[NetworkInterface] = []
    for name, addrs in psutil.net_if_addrs().items():
        mac = next((a.address for a in addrs if a.family == psutil.AF_LINK), "") or ""
        flags = getattr(stats.get(name), "flags", "") or ""
        is_loopback = name == "lo" or "loopback" in flags.split(",")
        interfaces.append(NetworkInterface(name=name, mac=mac, is_loopback=is_loopback))
    return interfaces


class SystemSources:
    """
    Access to the hardware description sources of the running system.

    Attributes:
        config (HwscanConfig): Runtime configuration (roots and tool names).
        logger (logging.Logger): Logger instance for debug reporting.
    """

    def __init__(
        self,
        config: HwscanConfig | None = None,
        runner: CommandRunner | None = None,
        interfaces: Callable[[], list[NetworkInterface]] | None = None,
        logger_name: str = "app.scanner.sources",
    ):
        """
        Initialize the source access capability.

        Args:
            config (HwscanConfig | None): Configuration, defaults if None.
            runner (CommandRunner | None): Replacement for subprocess execution.
            interfaces (Callable | None): Replacement for interface enumeration.
            logger_name (str): Name of the logger for this component.
        """
        self.config = config or HwscanConfig()
        self.logger = logging.getLogger(logger_name)
        self._runner = runner or self._run_subprocess
        self._interfaces = interfaces or list_network_interfaces

    @property
    def commands(self):
        return self.config.commands

    def proc_path(self, *parts: str) -> Path:
        return Path(self.config.sources.proc_root, *parts)

    def sys_path(self, *parts: str) -> Path:
        return Path(self.config.sources.sys_root, *parts)

    def read_text(self, path: str | os.PathLike) -> str | None:
        """Read a whole pseudo-file, or return None if it cannot be read."""
        try:
            with open(path, encoding="utf-8", errors="replace") as f:
                return f.read()
        except FileNotFoundError:
            return None
        except OSError as e:
            self.logger.debug(f"Cannot read {path}: {e}")
            return None

    def read_value(self, path: str | os.PathLike) -> str | None:
        """Read a single-value pseudo-file, stripped of surrounding whitespace."""
        text = self.read_text(path)
        return text.strip() if text is not None else None

    def read_required(self, path: str | os.PathLike) -> str:
        """
        Read a mandatory pseudo-file.

        Raises:
            SourceUnavailableError: If the file cannot be read.
        """
        try:
            with open(path, encoding="utf-8", errors="replace") as f:
                return f.read()
        except OSError as e:
            raise SourceUnavailableError(str(path), e.strerror or str(e)) from e

    def list_dir(self, path: str | os.PathLike) -> list[str] | None:
        """Sorted entry names of a directory, or None if it cannot be listed."""
        try:
            return sorted(os.listdir(path))
        except OSError as e:
            self.logger.debug(f"Cannot list {path}: {e}")
            return None

    def glob(self, pattern: str | os.PathLike) -> list[Path]:
        return [Path(p) for p in sorted(glob.glob(str(pattern)))]

    def resolve(self, path: str | os.PathLike) -> Path | None:
        """Resolve symlinks; None if the path does not exist."""
        if not os.path.exists(path):
            return None
        return Path(os.path.realpath(path))

    def run(self, argv: Sequence[str]) -> str | None:
        """Run an external tool and return its stdout, or None on any failure."""
        return self._runner(list(argv))

    def network_interfaces(self) -> list[NetworkInterface]:
        try:
            return self._interfaces()
        except (OSError, RuntimeError) as e:
            self.logger.debug(f"Cannot enumerate network interfaces: {e}")
            return []

    def _run_subprocess(self, argv: Sequence[str]) -> str | None:
        try:
            result = subprocess.run(
                argv,
                capture_output=True,
                text=True,
                timeout=self.commands.timeout,
                env={**os.environ, "LC_ALL": "C"},  # Force consistent locale
            )
        except FileNotFoundError:
            self.logger.debug(f"Command not found: {argv[0]}")
            return None
        except PermissionError:
            self.logger.debug(f"Permission denied: {argv[0]}")
            return None
        except subprocess.TimeoutExpired:
            self.logger.warning(f"Command timed out: {' '.join(argv)}")
            return None
        except OSError as e:
            self.logger.debug(f"Subprocess error for {argv[0]}: {e}")
            return None

        if result.returncode != 0:
            self.logger.debug(f"{' '.join(argv)} exited with status {result.returncode}: {result.stderr.strip()}")
            return None
        return result.stdout
