"""Build the resolver for a resolution mode from settings."""

from wakehost.config.loader import ConfigError, Settings
from wakehost.core.models import ResolutionMode
from wakehost.resolvers.base import AddressResolver
from wakehost.resolvers.dns_dhcp import DnsDhcpResolver
from wakehost.resolvers.inventory import InventoryResolver
from wakehost.services.dhcp import SshLeaseService, StaticAuthorityDirectory
from wakehost.services.dns import SocketNameResolver
from wakehost.services.inventory import HttpInventoryService


def build_resolver(mode: ResolutionMode, settings: Settings) -> AddressResolver:
    """
    Wire the concrete collaborators for mode.

    Raises:
        ConfigError: if the settings needed by mode are missing
    """
    if mode is ResolutionMode.INVENTORY:
        inv = settings.inventory
        if not inv.url:
            raise ConfigError("inventory: 'url' must be configured to use the inventory resolver")
        return InventoryResolver(
            HttpInventoryService(
                inv.url, token=inv.token, timeout=inv.timeout, verify_tls=inv.verify_tls
            )
        )

    if mode is ResolutionMode.DNS_DHCP:
        dhcp = settings.dhcp
        return DnsDhcpResolver(
            names=SocketNameResolver(),
            leases=SshLeaseService(
                lease_format=dhcp.lease_format,
                lease_file=dhcp.lease_file,
                ssh_user=dhcp.ssh_user,
                ssh_port=dhcp.ssh_port,
                ssh_key=dhcp.ssh_key,
                connect_timeout=dhcp.ssh_timeout,
            ),
            authorities=StaticAuthorityDirectory(dhcp.servers),
        )

    raise ConfigError(f"Unknown resolution mode: {mode}")
