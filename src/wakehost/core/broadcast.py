"""Subnet broadcast address arithmetic."""

import ipaddress
from typing import Optional

from wakehost.core.errors import ErrorKind, ValidationError

_ALL_ONES = 0xFFFFFFFF


def parse_ipv4(value: Optional[str]) -> ipaddress.IPv4Address:
    """
    Parse a dotted-quad IPv4 literal.

    Raises:
        ValidationError: MALFORMED_ADDRESS if value is not a valid IPv4 literal
    """
    if not isinstance(value, str):
        raise ValidationError(ErrorKind.MALFORMED_ADDRESS, f"Not an IPv4 address: {value!r}")
    try:
        return ipaddress.IPv4Address(value.strip())
    except ipaddress.AddressValueError as exc:
        raise ValidationError(
            ErrorKind.MALFORMED_ADDRESS, f"Not an IPv4 address: {value!r} ({exc})"
        ) from exc


def compute_broadcast(ip: Optional[str], mask: Optional[str]) -> str:
    """
    Compute the subnet broadcast address for an IPv4 address and mask.

    broadcast = (0xFFFFFFFF XOR mask) OR ip

    Args:
        ip: Host address (e.g., "192.168.1.50")
        mask: Subnet mask (e.g., "255.255.255.0")

    Returns:
        Broadcast address as a dotted quad (e.g., "192.168.1.255")

    Raises:
        ValidationError: MALFORMED_ADDRESS if either input is not valid IPv4
    """
    ip_int = int(parse_ipv4(ip))
    mask_int = int(parse_ipv4(mask))
    return str(ipaddress.IPv4Address((_ALL_ONES ^ mask_int) | ip_int))
