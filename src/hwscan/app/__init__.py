"""
Module app
----------

Presentation layer of HWSCAN: console report, embedded HTTP server and
logging setup.
"""

from .formatter import format_console, print_console
from .server import HardwareServer, create_app

__all__ = ["HardwareServer", "create_app", "format_console", "print_console"]
