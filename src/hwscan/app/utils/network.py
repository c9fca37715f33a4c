"""
Module app.utils.network
------------------------

Network helpers for the console footer and server banner.
"""

import socket

import psutil


def get_local_ip() -> str:
    """
    Return the first non-loopback IPv4 address of the machine.

    Returns:
        str: Dotted IPv4 address, or "localhost" if none is configured.
    """
    try:
        addrs = psutil.net_if_addrs()
    except OSError:
        return "localhost"

    for snics in addrs.values():
        for snic in snics:
            if snic.family == socket.AF_INET and not snic.address.startswith("127."):
                return snic.address
    return "localhost"
