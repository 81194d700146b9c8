"""Exception hierarchy for address resolution, validation and delivery."""

from enum import Enum


class ErrorKind(str, Enum):
    """Machine-readable reason attached to every WakeHostError."""

    INVALID_MAC_FORMAT = "invalid_mac_format"
    MALFORMED_ADDRESS = "malformed_address"
    MISSING_SUBNET = "missing_subnet"
    NO_DNS_RECORD = "no_dns_record"
    NO_LEASE_FOUND = "no_lease_found"
    NO_ADAPTERS_FOUND = "no_adapters_found"
    NO_DHCP_AUTHORITY = "no_dhcp_authority"
    SERVICE_UNAVAILABLE = "service_unavailable"
    INVALID_PORT = "invalid_port"
    SEND_FAILED = "send_failed"


class WakeHostError(Exception):
    """Base class for every error raised by wakehost."""

    def __init__(self, kind: ErrorKind, message: str) -> None:
        self.kind = kind
        self.message = message
        super().__init__(message)


class ValidationError(WakeHostError):
    """Raised for a malformed MAC, IPv4 value or port, before any network I/O."""


class ResolutionError(WakeHostError):
    """Raised when a resolver cannot produce a usable adapter."""


class NetworkError(WakeHostError):
    """Raised when the datagram could not be handed to the transport."""
