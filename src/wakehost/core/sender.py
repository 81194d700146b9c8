"""Datagram delivery of magic packets."""

import logging
import socket

from wakeonlan import create_socket

from wakehost.core.errors import ErrorKind, NetworkError

logger = logging.getLogger(__name__)


def send_packet(payload: bytes, destination: str, port: int = 9) -> None:
    """
    Send a payload as a single UDP datagram. Nothing is awaited in return.

    The socket comes from wakeonlan with SO_BROADCAST already set and the
    destination as its default peer. It is closed on every exit path.

    Args:
        payload: Bytes to transmit (a magic packet)
        destination: IPv4 address, unicast or subnet broadcast
        port: UDP port (default: 9)

    Raises:
        NetworkError: SEND_FAILED on any transport-level failure
    """
    try:
        with create_socket(host=destination, port=port, family=socket.AF_INET) as sock:
            sent = sock.send(payload)
    except (OSError, OverflowError) as exc:
        raise NetworkError(
            ErrorKind.SEND_FAILED, f"Failed to send to {destination}:{port}: {exc}"
        ) from exc
    logger.debug("Sent %d byte datagram to %s:%d", sent, destination, port)
