"""
Module hwscan.core.instrumentation.parsing
------------------------------------------

Text parsing shared by the detectors: `key: value` lines from kernel
pseudo-files and grouped records from external tool output, plus the size
strings used by the VRAM resolver.
"""

import re
from collections.abc import Callable, Iterable, Iterator

KIB = 1024
MIB = 1024**2
GIB = 1024**3

_SIZE_MULTIPLIERS = {"K": KIB, "M": MIB, "G": GIB}
_SIZE_RE = re.compile(r"^([0-9]*\.?[0-9]+)\s*([KMG])(?:i?B)?$", re.IGNORECASE)


def split_key_value(line: str, separator: str = ":") -> tuple[str, str] | None:
    """
    Split a `key <sep> value` line on the first separator.

    Returns:
        tuple[str, str] | None: Stripped key and value, or None if the line
        has no separator.
    """
    key, sep, value = line.partition(separator)
    if not sep:
        return None
    return key.strip(), value.strip()


def iter_key_values(lines: Iterable[str], separator: str = ":") -> Iterator[tuple[str, str]]:
    """Yield `(key, value)` pairs for every line that contains the separator."""
    for line in lines:
        pair = split_key_value(line, separator)
        if pair is not None:
            yield pair


class RecordBlockParser:
    """
    Grouped-record parser for tool output such as `dmidecode -t memory`.

    A new record starts at every line beginning with `marker`. Inside a record,
    lines beginning with one of the registered field prefixes set the
    corresponding field to the remainder of the line. Lines before the first
    marker are ignored.

    Attributes:
        marker (str): Line prefix that opens a new record.
        fields (dict[str, str]): Mapping from line prefix to field name.
    """

    def __init__(self, marker: str, fields: dict[str, str], accept: Callable[[dict[str, str]], bool] | None = None):
        self.marker = marker
        self.fields = fields
        self.accept = accept or (lambda record: True)

    def parse(self, text: str) -> list[dict[str, str]]:
        records: list[dict[str, str]] = []
        current: dict[str, str] | None = None

        for raw in text.splitlines():
            line = raw.strip()

            if line.startswith(self.marker):
                self._close(current, records)
                current = {}
                continue

            if current is None:
                continue

            for prefix, name in self.fields.items():
                if line.startswith(prefix):
                    current[name] = line[len(prefix) :].strip()
                    break

        self._close(current, records)
        return records

    def _close(self, record: dict[str, str] | None, records: list[dict[str, str]]) -> None:
        if record is not None and self.accept(record):
            records.append(record)


def parse_size_string(value: str) -> int:
    """
    Convert a size string to bytes.

    `8G`, `256M` and `512K` (optionally followed by `B`/`iB`, with or without a
    space) are multiplied by 2^30, 2^20 and 2^10. A bare integer is taken as a
    raw byte count. Anything else yields 0.
    """
    s = value.strip()
    if not s:
        return 0

    m = _SIZE_RE.match(s)
    if m:
        return int(float(m.group(1)) * _SIZE_MULTIPLIERS[m.group(2).upper()])

    if s.isascii() and s.isdigit():
        return int(s)
    return 0


def format_size_bytes(num_bytes: int) -> str:
    """Format a byte count as whole `N GB` from 1 GiB upwards, else `N MB`."""
    gb = num_bytes / GIB
    if gb >= 1:
        return f"{gb:.0f} GB"
    return f"{num_bytes / MIB:.0f} MB"
