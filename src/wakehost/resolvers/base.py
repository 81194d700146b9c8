"""Resolver interface and the collaborator contracts resolvers depend on."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, Protocol

from wakehost.core.models import AdapterRecord

IPV4 = "IPv4"
IPV6 = "IPv6"


@dataclass(frozen=True)
class InventoryAdapter:
    """
    Network adapter facts as held by the inventory backend.

    ip_addresses and subnet_masks are comma-separated and may mix IPv4 and
    IPv6 entries; the n-th subnet belongs to the n-th address.
    """

    mac_address: str
    ip_addresses: str
    subnet_masks: str = ""


@dataclass(frozen=True)
class ResolvedAddress:
    address: str
    family: str


class InventoryService(Protocol):
    def query_adapters(self, host_name: str) -> list[InventoryAdapter]:
        """Adapters of host_name that have both a MAC and an IP address."""
        ...


class NameResolutionService(Protocol):
    def resolve(self, host_name: str) -> list[ResolvedAddress]: ...


class DhcpLeaseService(Protocol):
    def lookup_lease(self, server: str, ip: str) -> Optional[str]:
        """Client identifier (MAC) leased to ip by server, or None."""
        ...


class DhcpAuthorityDirectory(Protocol):
    def list_authorities(self) -> list[str]: ...


class AddressResolver(ABC):
    """Turns a host name into the adapters a magic packet should reach."""

    @abstractmethod
    def resolve(self, host_name: str) -> list[AdapterRecord]:
        """
        Resolve host_name to zero or more adapter records.

        Raises:
            ResolutionError: when the strategy cannot proceed at all
        """
