"""Magic packet encoding."""

import re

from wakeonlan import create_magic_packet

from wakehost.core.errors import ErrorKind, ValidationError

MAGIC_PACKET_SIZE = 102

_SEPARATORS = re.compile(r"[:\-]")
_OCTET = re.compile(r"^[0-9A-Fa-f]{1,2}$")


def parse_mac(mac: str) -> bytes:
    """
    Parse a MAC address of six hex octets separated by ':' or '-'.

    Single-digit octets ("0:1b:...") are accepted and zero-padded.

    Raises:
        ValidationError: INVALID_MAC_FORMAT on wrong octet count or non-hex octet
    """
    if not isinstance(mac, str):
        raise ValidationError(ErrorKind.INVALID_MAC_FORMAT, f"Invalid MAC address: {mac!r}")
    octets = _SEPARATORS.split(mac.strip())
    if len(octets) != 6:
        raise ValidationError(
            ErrorKind.INVALID_MAC_FORMAT,
            f"Invalid MAC address {mac!r}: expected 6 octets, got {len(octets)}",
        )
    for octet in octets:
        if not _OCTET.match(octet):
            raise ValidationError(
                ErrorKind.INVALID_MAC_FORMAT,
                f"Invalid MAC address {mac!r}: bad octet {octet!r}",
            )
    return bytes(int(octet, 16) for octet in octets)


def format_mac(mac_bytes: bytes) -> str:
    return ":".join(f"{b:02X}" for b in mac_bytes)


def build_magic_packet(mac: str) -> bytes:
    """
    Build the 102-byte Wake-on-LAN payload for a MAC address.

    Layout: 6 x 0xFF synchronization bytes, then the MAC repeated 16 times.

    Raises:
        ValidationError: INVALID_MAC_FORMAT if the MAC cannot be parsed
    """
    return create_magic_packet(format_mac(parse_mac(mac)))
