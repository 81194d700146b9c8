"""HTTP client for the device inventory API."""

import logging
from typing import Any, Optional
from urllib.parse import quote

import httpx

from wakehost.core.errors import ErrorKind, ResolutionError
from wakehost.resolvers.base import InventoryAdapter

logger = logging.getLogger(__name__)


def _as_csv(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        return ",".join(str(v) for v in value if v)
    return str(value)


def adapter_from_json(item: dict[str, Any]) -> Optional[InventoryAdapter]:
    """
    Convert one adapter object of the inventory API into an InventoryAdapter.

    Accepts either snake_case or the backend's native field names
    (MACAddress / IPAddress / IPSubnet). Returns None when the MAC or the
    IP field is missing, mirroring the backend's own "both present" filter.
    """
    mac = item.get("mac_address") or item.get("MACAddress")
    ips = _as_csv(item.get("ip_addresses") or item.get("IPAddress"))
    masks = _as_csv(item.get("subnet_masks") or item.get("IPSubnet"))
    if not mac or not ips:
        return None
    return InventoryAdapter(mac_address=str(mac), ip_addresses=ips, subnet_masks=masks)


class HttpInventoryService:
    """
    Queries GET {base_url}/hosts/{host}/adapters and returns the adapters
    that have both a MAC and an IP address.
    """

    def __init__(
        self,
        base_url: str,
        token: Optional[str] = None,
        timeout: float = 30,
        verify_tls: bool = True,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.timeout = timeout
        self.verify_tls = verify_tls

    def query_adapters(self, host_name: str) -> list[InventoryAdapter]:
        url = f"{self.base_url}/hosts/{quote(host_name, safe='')}/adapters"
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"

        logger.debug("Querying inventory: GET %s", url)
        try:
            resp = httpx.get(url, headers=headers, timeout=self.timeout, verify=self.verify_tls)
            if resp.status_code == 404:
                logger.info("Inventory has no record of host %s", host_name)
                return []
            resp.raise_for_status()
            payload = resp.json()
        except (httpx.HTTPError, ValueError) as exc:
            raise ResolutionError(
                ErrorKind.SERVICE_UNAVAILABLE, f"Inventory query for {host_name} failed: {exc}"
            ) from exc

        items = payload.get("adapters", []) if isinstance(payload, dict) else payload
        if not isinstance(items, list):
            raise ResolutionError(
                ErrorKind.SERVICE_UNAVAILABLE,
                f"Inventory returned an unexpected payload for {host_name}",
            )

        adapters: list[InventoryAdapter] = []
        for item in items:
            adapter = adapter_from_json(item) if isinstance(item, dict) else None
            if adapter is None:
                logger.debug("Ignoring inventory entry without MAC/IP: %r", item)
                continue
            adapters.append(adapter)
        return adapters
