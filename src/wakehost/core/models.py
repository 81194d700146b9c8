"""Adapter records, mode enums and the per-invocation report."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class ResolutionMode(str, Enum):
    INVENTORY = "inventory"
    DNS_DHCP = "dhcp"


class DeliveryMode(str, Enum):
    BROADCAST = "broadcast"
    UNICAST = "unicast"


@dataclass(frozen=True)
class AdapterRecord:
    """One network adapter of the target host, as produced by a resolver."""

    mac_address: str
    ipv4: str
    # None when the resolver has no way to learn it (DNS + DHCP path).
    subnet_mask: Optional[str] = None


@dataclass
class AdapterOutcome:
    """Result of one send attempt for a single adapter."""

    adapter: AdapterRecord
    success: bool
    destination: Optional[str] = None
    error: Optional[str] = None
    error_kind: Optional[str] = None


@dataclass
class OperationReport:
    """Aggregated outcomes of one wake() invocation."""

    host_name: str
    delivery_mode: DeliveryMode
    resolution_mode: ResolutionMode
    port: int
    outcomes: list[AdapterOutcome] = field(default_factory=list)

    @property
    def succeeded(self) -> list[AdapterOutcome]:
        return [o for o in self.outcomes if o.success]

    @property
    def failed(self) -> list[AdapterOutcome]:
        return [o for o in self.outcomes if not o.success]

    @property
    def is_empty(self) -> bool:
        return not self.outcomes

    @property
    def success(self) -> bool:
        return not self.failed
