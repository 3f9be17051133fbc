"""Network helpers."""

from __future__ import annotations

import socket

_PROBE_ADDRESS = ("8.8.8.8", 80)


def get_outbound_ip() -> str:
    """Return the local address preferred for outbound traffic.

    A UDP socket is connected to a public address (no data is sent) and its
    local end is read. Raises OSError when the address cannot be determined.
    """
    try:
        with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
            sock.connect(_PROBE_ADDRESS)
            address = sock.getsockname()[0]
    except OSError as exc:
        raise OSError(f"cannot determine outbound IP via UDP dial: {exc}") from exc
    if not address or address == "0.0.0.0":
        raise OSError("cannot determine local IP address")
    return address