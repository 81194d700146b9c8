"""Wake orchestration: resolve adapters, then build and send one packet each."""

import logging
from collections.abc import Mapping
from typing import Optional

from wakehost.config.loader import Settings
from wakehost.core.broadcast import compute_broadcast, parse_ipv4
from wakehost.core.errors import ErrorKind, ResolutionError, ValidationError, WakeHostError
from wakehost.core.models import (
    AdapterOutcome,
    AdapterRecord,
    DeliveryMode,
    OperationReport,
    ResolutionMode,
)
from wakehost.core.packet import build_magic_packet
from wakehost.core.sender import send_packet
from wakehost.resolvers.base import AddressResolver
from wakehost.resolvers.factory import build_resolver

logger = logging.getLogger(__name__)

DEFAULT_PORT = 9
MAX_PORT = 65535


def select_resolver(
    mode: ResolutionMode,
    resolvers: Optional[Mapping[ResolutionMode, AddressResolver]] = None,
    settings: Optional[Settings] = None,
) -> AddressResolver:
    """Return the resolver registered for mode, or build one from settings."""
    if resolvers is not None and mode in resolvers:
        return resolvers[mode]

    return build_resolver(mode, settings or Settings())


def destination_for(adapter: AdapterRecord, delivery_mode: DeliveryMode) -> str:
    """
    Compute where the packet for adapter should be sent.

    Raises:
        ValidationError: MALFORMED_ADDRESS for a bad IPv4 or mask,
            MISSING_SUBNET for broadcast delivery without a mask
    """
    if delivery_mode is DeliveryMode.UNICAST:
        return str(parse_ipv4(adapter.ipv4))
    if adapter.subnet_mask is None:
        raise ValidationError(
            ErrorKind.MISSING_SUBNET,
            f"No subnet mask known for {adapter.ipv4}; use unicast delivery for this adapter",
        )
    return compute_broadcast(adapter.ipv4, adapter.subnet_mask)


def wake_adapter(adapter: AdapterRecord, port: int, delivery_mode: DeliveryMode) -> AdapterOutcome:
    """Compute, build and send for a single adapter; failures land in the outcome."""
    destination: Optional[str] = None
    try:
        destination = destination_for(adapter, delivery_mode)
        logger.debug(
            "Adapter %s: %s delivery to %s:%d",
            adapter.mac_address,
            delivery_mode.value,
            destination,
            port,
        )
        payload = build_magic_packet(adapter.mac_address)
        send_packet(payload, destination, port)
    except WakeHostError as exc:
        logger.error("Failed to wake adapter %s: %s", adapter.mac_address, exc)
        return AdapterOutcome(
            adapter=adapter,
            success=False,
            destination=destination,
            error=str(exc),
            error_kind=exc.kind.value,
        )

    logger.info("Magic packet sent for %s via %s:%d", adapter.mac_address, destination, port)
    return AdapterOutcome(adapter=adapter, success=True, destination=destination)


def wake(
    host_name: str,
    port: int = DEFAULT_PORT,
    delivery_mode: DeliveryMode = DeliveryMode.BROADCAST,
    resolution_mode: ResolutionMode = ResolutionMode.INVENTORY,
    resolvers: Optional[Mapping[ResolutionMode, AddressResolver]] = None,
    settings: Optional[Settings] = None,
    require_adapters: bool = False,
) -> OperationReport:
    """
    Wake every resolved adapter of host_name.

    Workflow:
        1. Resolve adapters with the resolver for resolution_mode
        2. For each adapter: compute destination, build packet, send
        3. Record each adapter's outcome; one failure never stops the loop

    Args:
        host_name: Name of the machine to wake
        port: UDP destination port (default: 9)
        delivery_mode: Subnet broadcast or unicast to the adapter's IP
        resolution_mode: Inventory or DNS + DHCP lookup
        resolvers: Pre-built resolvers by mode (built from settings if absent)
        settings: Settings used to build a missing resolver
        require_adapters: Raise instead of returning an empty report

    Returns:
        OperationReport with one outcome per resolved adapter

    Raises:
        ValidationError: INVALID_PORT when port is outside 1-65535
        ResolutionError: when the resolver cannot proceed (or, with
            require_adapters, when no adapters were found)
    """
    if not 1 <= port <= MAX_PORT:
        raise ValidationError(ErrorKind.INVALID_PORT, f"Port {port} out of range 1-{MAX_PORT}")

    resolver = select_resolver(resolution_mode, resolvers, settings)
    report = OperationReport(
        host_name=host_name,
        delivery_mode=delivery_mode,
        resolution_mode=resolution_mode,
        port=port,
    )

    logger.info("Resolving %s via %s", host_name, resolution_mode.value)
    adapters = resolver.resolve(host_name)

    if not adapters:
        if require_adapters:
            raise ResolutionError(
                ErrorKind.NO_ADAPTERS_FOUND, f"No adapters with a MAC and IPv4 found for {host_name}"
            )
        logger.warning("No adapters with a MAC and IPv4 found for %s; nothing to wake", host_name)
        return report

    for adapter in adapters:
        report.outcomes.append(wake_adapter(adapter, port, delivery_mode))

    logger.info(
        "Woke %s: %d of %d adapter(s) sent",
        host_name,
        len(report.succeeded),
        len(report.outcomes),
    )
    return report
