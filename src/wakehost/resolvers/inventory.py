"""Adapter resolution through the device inventory."""

import ipaddress
import logging
from typing import Optional

from wakehost.core.models import AdapterRecord
from wakehost.resolvers.base import AddressResolver, InventoryAdapter, InventoryService

logger = logging.getLogger(__name__)


def _split_csv(value: str) -> list[str]:
    return [part.strip() for part in (value or "").split(",") if part.strip()]


def _is_ipv4(value: str) -> bool:
    try:
        ipaddress.IPv4Address(value)
    except ValueError:
        return False
    return True


def select_ipv4(adapter: InventoryAdapter) -> Optional[tuple[str, Optional[str]]]:
    """
    Pick the IPv4 address of an adapter and the subnet mask that goes with it.

    The inventory lists every address of the adapter in one comma-separated
    field, in no guaranteed family order. The first IPv4 entry wins; its mask
    is the subnet entry at the same index, or else the first IPv4-shaped mask.

    Returns:
        (ipv4, subnet_mask) or None if the adapter has no IPv4 address
    """
    addresses = _split_csv(adapter.ip_addresses)
    masks = _split_csv(adapter.subnet_masks)

    for index, address in enumerate(addresses):
        if not _is_ipv4(address):
            continue
        mask: Optional[str] = None
        if index < len(masks) and _is_ipv4(masks[index]):
            mask = masks[index]
        else:
            mask = next((m for m in masks if _is_ipv4(m)), None)
        return address, mask
    return None


class InventoryResolver(AddressResolver):
    """Looks up every adapter the inventory knows for a host."""

    def __init__(self, service: InventoryService) -> None:
        self.service = service

    def resolve(self, host_name: str) -> list[AdapterRecord]:
        adapters = self.service.query_adapters(host_name)
        logger.debug("Inventory returned %d adapter(s) for %s", len(adapters), host_name)

        records: list[AdapterRecord] = []
        for adapter in adapters:
            selected = select_ipv4(adapter)
            if selected is None:
                logger.warning(
                    "Skipping adapter %s of %s: no IPv4 address in %r",
                    adapter.mac_address,
                    host_name,
                    adapter.ip_addresses,
                )
                continue
            ipv4, mask = selected
            records.append(AdapterRecord(mac_address=adapter.mac_address, ipv4=ipv4, subnet_mask=mask))
        return records
