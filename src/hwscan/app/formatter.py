"""
Module app.formatter
--------------------

Console rendering of a hardware snapshot using rich panels and tables.
"""

import io

from rich import box
from rich.console import Console, Group, RenderableType
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from hwscan import __version__
from hwscan.core.configuration import HardwareSnapshotModel

REPORT_WIDTH = 80


def _field_table() -> Table:
    t = Table(box=None, show_header=False, pad_edge=False)
    t.add_column("Field", style="bold", no_wrap=True)
    t.add_column("Value")
    return t


def _add(t: Table, *cells: str) -> None:
    t.add_row(*(Text(c) for c in cells))


def _cpu_panel(snapshot: HardwareSnapshotModel) -> Panel:
    cpu = snapshot.cpu
    t = _field_table()
    _add(t, "Model", cpu.model)
    _add(t, "Vendor", cpu.vendor)
    _add(t, "Cores", f"{cpu.cores} physical / {cpu.threads} threads")
    _add(t, "Speed", f"{cpu.speed_mhz / 1000:.2f} GHz")
    if cpu.cache_size:
        _add(t, "Cache", cpu.cache_size)
    return Panel(t, title="CPU", title_align="left", border_style="yellow")


def _memory_panel(snapshot: HardwareSnapshotModel) -> Panel:
    memory = snapshot.memory
    t = _field_table()
    _add(t, "Total", f"{memory.total_gb:.2f} GB ({memory.total_bytes} bytes)")

    for i, module in enumerate(memory.modules, 1):
        line = " ".join(p for p in (module.size, module.type, module.speed) if p)
        if module.locator:
            line += f" ({module.locator})"
        if module.manufacturer and module.manufacturer != "Unknown":
            line += f"\n{module.manufacturer}"
            if module.part_number:
                line += f" | P/N: {module.part_number}"
        _add(t, f"[{i}]", line)

    return Panel(t, title="Memory", title_align="left", border_style="green")


def _motherboard_panel(snapshot: HardwareSnapshotModel) -> Panel:
    board = snapshot.motherboard
    t = _field_table()
    _add(t, "Manufacturer", board.manufacturer)
    _add(t, "Model", board.product)
    if board.version:
        _add(t, "Version", board.version)
    if board.bios_vendor:
        _add(t, "BIOS", f"{board.bios_vendor} v{board.bios_version} ({board.bios_date})")
    return Panel(t, title="Motherboard", title_align="left", border_style="blue")


def _gpu_panel(snapshot: HardwareSnapshotModel) -> Panel:
    t = Table(box=box.SIMPLE_HEAVY)
    t.add_column("#", justify="right")
    t.add_column("GPU")
    t.add_column("PCI")
    t.add_column("VRAM")
    for i, gpu in enumerate(snapshot.gpu, 1):
        _add(t, str(i), f"{gpu.vendor} {gpu.model}", gpu.pci_address, gpu.memory_size or "-")
    return Panel(t, title="GPU", title_align="left", border_style="magenta")


def _storage_panel(snapshot: HardwareSnapshotModel) -> Panel:
    t = Table(box=box.SIMPLE_HEAVY)
    t.add_column("#", justify="right")
    t.add_column("Model")
    t.add_column("Capacity", justify="right")
    t.add_column("Type")
    t.add_column("Device")
    for i, disk in enumerate(snapshot.disks, 1):
        model = disk.model or disk.name
        if disk.vendor:
            model += f" ({disk.vendor})"
        _add(t, str(i), model, f"{disk.size_gb:.1f} GB", disk.type or "-", f"/dev/{disk.name}")
    return Panel(t, title="Storage", title_align="left", border_style="cyan")


def build_report(snapshot: HardwareSnapshotModel, web_url: str | None = None) -> RenderableType:
    """
    Build the renderable report for a snapshot.

    Args:
        snapshot (HardwareSnapshotModel): Finalized snapshot.
        web_url (str | None): URL of the embedded server, omitted if None.
    """
    parts: list[RenderableType] = [
        Panel(Text(f"HWSCAN v{__version__}\nHardware Detection Tool", justify="center"), border_style="white"),
        Panel(Text(f"Machine ID: {snapshot.machine_id}"), title="Identification", title_align="left"),
        _cpu_panel(snapshot),
        _memory_panel(snapshot),
        _motherboard_panel(snapshot),
    ]
    if snapshot.gpu:
        parts.append(_gpu_panel(snapshot))
    if snapshot.disks:
        parts.append(_storage_panel(snapshot))

    footer = Text()
    if web_url:
        footer.append(f"Web interface: {web_url}\n")
    footer.append(f"Captured at:   {snapshot.timestamp}")
    parts.append(footer)
    return Group(*parts)


def format_console(snapshot: HardwareSnapshotModel, web_url: str | None = None, width: int = REPORT_WIDTH) -> str:
    """Render the report as plain text."""
    console = Console(file=io.StringIO(), width=width, color_system=None, force_terminal=False)
    console.print(build_report(snapshot, web_url))
    return console.file.getvalue()


def print_console(snapshot: HardwareSnapshotModel, web_url: str | None = None, console: Console | None = None) -> None:
    """Print the report to the terminal."""
    (console or Console()).print(build_report(snapshot, web_url))
