from .exporter import SnapshotExporter, export_to_json, find_usb_mounts, format_export_message, generate_filename

__all__ = ["SnapshotExporter", "export_to_json", "find_usb_mounts", "format_export_message", "generate_filename"]
