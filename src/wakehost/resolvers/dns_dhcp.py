"""Adapter resolution through DNS and the DHCP lease store."""

import logging

from wakehost.core.errors import ErrorKind, ResolutionError
from wakehost.core.models import AdapterRecord
from wakehost.resolvers.base import (
    IPV4,
    AddressResolver,
    DhcpAuthorityDirectory,
    DhcpLeaseService,
    NameResolutionService,
)

logger = logging.getLogger(__name__)


class DnsDhcpResolver(AddressResolver):
    """
    Resolve the host's IPv4 address via DNS, then ask the first DHCP
    authority which client holds a lease on it.

    Yields at most one adapter and never learns a subnet mask, so records
    from this resolver can only be woken by unicast delivery.
    """

    def __init__(
        self,
        names: NameResolutionService,
        leases: DhcpLeaseService,
        authorities: DhcpAuthorityDirectory,
    ) -> None:
        self.names = names
        self.leases = leases
        self.authorities = authorities

    def resolve(self, host_name: str) -> list[AdapterRecord]:
        addresses = self.names.resolve(host_name)
        ipv4 = next((a.address for a in addresses if a.family == IPV4), None)
        if ipv4 is None:
            raise ResolutionError(
                ErrorKind.NO_DNS_RECORD, f"No IPv4 DNS record found for {host_name}"
            )
        logger.debug("DNS resolved %s to %s", host_name, ipv4)

        servers = self.authorities.list_authorities()
        if not servers:
            raise ResolutionError(
                ErrorKind.NO_DHCP_AUTHORITY, "No DHCP server is configured to query for leases"
            )
        server = servers[0]

        mac = self.leases.lookup_lease(server, ipv4)
        if not mac:
            raise ResolutionError(
                ErrorKind.NO_LEASE_FOUND,
                f"No DHCP lease for {host_name} ({ipv4}) on {server}. The target may "
                "have a static IP address or a reservation; retry with the inventory "
                "resolver instead.",
            )
        logger.debug("DHCP server %s leased %s to %s", server, ipv4, mac)
        return [AdapterRecord(mac_address=mac, ipv4=ipv4)]
