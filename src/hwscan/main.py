import argparse
import signal
import sys
import threading

from hwscan import __version__
from hwscan.app import HardwareServer, print_console
from hwscan.app.server import find_web_dir
from hwscan.app.utils import get_app_logger, get_local_ip, setup_logging
from hwscan.core.configuration import load_config
from hwscan.core.exceptions import ConfigurationError
from hwscan.core.export import format_export_message
from hwscan.core.orchestration import Orchestrator


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hwscan",
        description="HWSCAN - hardware inventory and machine identification for diagnostic boot environments",
    )
    parser.add_argument("--port", type=int, default=None, help="Port for the web server (default: 8080)")
    parser.add_argument("--no-server", action="store_true", help="Do not start the web server")
    parser.add_argument("--no-export", action="store_true", help="Do not export the snapshot to JSON")
    parser.add_argument("--output", "-o", type=str, default=None, help="Export JSON to this path instead of auto-detecting")
    parser.add_argument("--config", "-c", type=str, default=None, help="Path to YAML config (default: built-in + HWSCAN_CONFIG)")
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Console log level (default: WARNING)",
    )
    parser.add_argument("--version", action="version", version=f"HWSCAN v{__version__}")
    return parser


def wait_for_shutdown() -> None:
    """Block until SIGINT or SIGTERM."""
    stop = threading.Event()

    def _handler(signum, frame):
        stop.set()

    signal.signal(signal.SIGINT, _handler)
    signal.signal(signal.SIGTERM, _handler)
    stop.wait()


def main(argv: list[str] | None = None) -> int:
    """
    Main entrypoint for HWSCAN.

    Returns:
        int: Exit code (0 = success, 1 = failure).
    """
    args = build_parser().parse_args(argv)

    try:
        config = load_config(args.config)
    except ConfigurationError as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return 1

    setup_logging(config.logging, level=args.log_level)
    logger = get_app_logger("app.cli")
    logger.info(f"Starting HWSCAN v{__version__}")

    server_enabled = config.server.enabled and not args.no_server
    export_enabled = config.export.enabled and not args.no_export
    port = args.port if args.port is not None else config.server.port

    orchestrator = Orchestrator(config)
    snapshot = orchestrator.execute_hardware_scan()
    if snapshot is None:
        print("Error detecting hardware; see the log for details.", file=sys.stderr)
        return 1

    web_url = f"http://{get_local_ip()}:{port}" if server_enabled else None
    print_console(snapshot, web_url)

    if export_enabled:
        exported = orchestrator.export_snapshot(snapshot, args.output)
        if exported is not None:
            path, is_usb = exported
            print(format_export_message(path, is_usb))

    if not server_enabled:
        return 0

    server = HardwareServer(snapshot, host=config.server.host, port=port, web_dir=find_web_dir(config.server.web_dirs))
    try:
        server.start()
    except OSError as e:
        logger.warning(f"Could not start web server: {e}")
        return 0

    print(f"Web server: {web_url}")
    print("HWSCAN is running. Press Ctrl+C to exit.")
    wait_for_shutdown()

    print("Shutting down HWSCAN...")
    server.shutdown()
    logger.info("HWSCAN stopped")
    return 0


if __name__ == "__main__":
    sys.exit(main())
