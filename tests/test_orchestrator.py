"""Tests for wake orchestration."""

from typing import Optional
from unittest.mock import MagicMock, patch

import pytest

from wakehost.config.loader import ConfigError, Settings
from wakehost.core.errors import ErrorKind, NetworkError, ResolutionError, ValidationError
from wakehost.core.models import AdapterRecord, DeliveryMode, ResolutionMode
from wakehost.core.orchestrator import destination_for, select_resolver, wake
from wakehost.resolvers.base import IPV4, AddressResolver, InventoryAdapter, ResolvedAddress
from wakehost.resolvers.dns_dhcp import DnsDhcpResolver
from wakehost.resolvers.inventory import InventoryResolver
from wakehost.services.dhcp import StaticAuthorityDirectory

MAC_1 = "AA:BB:CC:DD:EE:01"
MAC_2 = "AA:BB:CC:DD:EE:02"


class _StaticResolver(AddressResolver):
    def __init__(self, records: list[AdapterRecord]) -> None:
        self.records = records

    def resolve(self, host_name: str) -> list[AdapterRecord]:
        return list(self.records)


class _Inventory:
    def __init__(self, adapters: list[InventoryAdapter]) -> None:
        self.adapters = adapters

    def query_adapters(self, host_name: str) -> list[InventoryAdapter]:
        return self.adapters


class _Names:
    def resolve(self, host_name: str) -> list[ResolvedAddress]:
        return [ResolvedAddress("192.168.1.50", IPV4)]


class _NoLeases:
    def lookup_lease(self, server: str, ip: str) -> Optional[str]:
        return None


def _inventory(*adapters: InventoryAdapter) -> dict:
    return {ResolutionMode.INVENTORY: InventoryResolver(_Inventory(list(adapters)))}


class TestDestinationFor:
    def test_broadcast_uses_subnet(self) -> None:
        record = AdapterRecord(MAC_1, "192.168.1.50", "255.255.255.0")
        assert destination_for(record, DeliveryMode.BROADCAST) == "192.168.1.255"

    def test_unicast_uses_ip(self) -> None:
        record = AdapterRecord(MAC_1, "192.168.1.50", "255.255.255.0")
        assert destination_for(record, DeliveryMode.UNICAST) == "192.168.1.50"


@patch("wakehost.core.orchestrator.send_packet")
class TestWake:
    def test_broadcast_sends_to_subnet_broadcast(self, mock_send: MagicMock) -> None:
        resolvers = _inventory(InventoryAdapter(MAC_1, "192.168.1.50,fe80::1", "255.255.255.0,64"))

        report = wake("pc-042", resolvers=resolvers)

        assert report.success
        assert [o.destination for o in report.outcomes] == ["192.168.1.255"]
        payload, destination, port = mock_send.call_args[0]
        assert len(payload) == 102
        assert (destination, port) == ("192.168.1.255", 9)

    def test_unicast_sends_to_adapter_ip(self, mock_send: MagicMock) -> None:
        resolvers = _inventory(InventoryAdapter(MAC_1, "192.168.1.50", "255.255.255.0"))

        report = wake("pc-042", port=7, delivery_mode=DeliveryMode.UNICAST, resolvers=resolvers)

        assert report.outcomes[0].destination == "192.168.1.50"
        assert mock_send.call_args[0][1:] == ("192.168.1.50", 7)

    def test_empty_inventory_is_empty_report(self, mock_send: MagicMock) -> None:
        report = wake("ghost", resolvers=_inventory())

        assert report.is_empty
        assert report.success
        mock_send.assert_not_called()

    def test_empty_inventory_with_require_adapters_raises(self, mock_send: MagicMock) -> None:
        with pytest.raises(ResolutionError) as exc_info:
            wake("ghost", resolvers=_inventory(), require_adapters=True)
        assert exc_info.value.kind is ErrorKind.NO_ADAPTERS_FOUND

    def test_no_lease_raises_and_sends_nothing(self, mock_send: MagicMock) -> None:
        resolvers = {
            ResolutionMode.DNS_DHCP: DnsDhcpResolver(
                _Names(), _NoLeases(), StaticAuthorityDirectory(["dhcp1"])
            )
        }

        with pytest.raises(ResolutionError) as exc_info:
            wake("pc-042", resolution_mode=ResolutionMode.DNS_DHCP, resolvers=resolvers)

        assert exc_info.value.kind is ErrorKind.NO_LEASE_FOUND
        mock_send.assert_not_called()

    def test_send_failure_isolated_to_one_adapter(self, mock_send: MagicMock) -> None:
        mock_send.side_effect = [NetworkError(ErrorKind.SEND_FAILED, "unreachable"), None]
        resolvers = _inventory(
            InventoryAdapter(MAC_1, "10.1.0.5", "255.255.0.0"),
            InventoryAdapter(MAC_2, "192.168.1.50", "255.255.255.0"),
        )

        report = wake("pc-042", resolvers=resolvers)

        assert mock_send.call_count == 2
        assert len(report.failed) == 1
        assert len(report.succeeded) == 1
        assert report.failed[0].adapter.mac_address == MAC_1
        assert report.failed[0].error_kind == ErrorKind.SEND_FAILED.value
        assert report.succeeded[0].adapter.mac_address == MAC_2
        assert not report.success

    def test_invalid_mac_rejected_before_send(self, mock_send: MagicMock) -> None:
        resolvers = {
            ResolutionMode.INVENTORY: _StaticResolver(
                [
                    AdapterRecord("AA:BB:CC:DD:EE", "10.0.0.5", "255.0.0.0"),
                    AdapterRecord(MAC_2, "10.0.0.6", "255.0.0.0"),
                ]
            )
        }

        report = wake("pc", resolvers=resolvers)

        assert report.outcomes[0].error_kind == ErrorKind.INVALID_MAC_FORMAT.value
        assert report.outcomes[1].success
        mock_send.assert_called_once()
        assert mock_send.call_args[0][1] == "10.255.255.255"

    def test_malformed_address_recorded(self, mock_send: MagicMock) -> None:
        resolvers = {
            ResolutionMode.INVENTORY: _StaticResolver([AdapterRecord(MAC_1, "10.0.0", "255.0.0.0")])
        }

        report = wake("pc", resolvers=resolvers)

        assert report.outcomes[0].error_kind == ErrorKind.MALFORMED_ADDRESS.value
        mock_send.assert_not_called()

    def test_broadcast_without_subnet_fails_adapter(self, mock_send: MagicMock) -> None:
        resolvers = {
            ResolutionMode.INVENTORY: _StaticResolver([AdapterRecord(MAC_1, "10.0.0.5", None)])
        }

        report = wake("pc", resolvers=resolvers)

        assert report.outcomes[0].error_kind == ErrorKind.MISSING_SUBNET.value
        mock_send.assert_not_called()

    def test_adapters_sent_in_resolver_order(self, mock_send: MagicMock) -> None:
        resolvers = _inventory(
            InventoryAdapter(MAC_2, "10.0.0.6", "255.255.255.0"),
            InventoryAdapter(MAC_1, "10.0.1.6", "255.255.255.0"),
        )

        wake("pc", delivery_mode=DeliveryMode.UNICAST, resolvers=resolvers)

        assert [c[0][1] for c in mock_send.call_args_list] == ["10.0.0.6", "10.0.1.6"]

    @pytest.mark.parametrize("port", [0, -1, 65536, 70000])
    def test_port_out_of_range_rejected_before_resolving(self, mock_send: MagicMock, port: int) -> None:
        resolver = MagicMock(spec=AddressResolver)
        resolvers = {ResolutionMode.INVENTORY: resolver}

        with pytest.raises(ValidationError) as exc_info:
            wake("pc", port=port, resolvers=resolvers)

        assert exc_info.value.kind is ErrorKind.INVALID_PORT
        resolver.resolve.assert_not_called()
        mock_send.assert_not_called()

    def test_highest_port_accepted(self, mock_send: MagicMock) -> None:
        resolvers = _inventory(
            InventoryAdapter(MAC_1, "10.0.0.6", "255.255.255.0"),
            InventoryAdapter(MAC_2, "10.0.1.6", "255.255.255.0"),
        )

        report = wake("pc", port=65535, resolvers=resolvers)

        assert report.success
        assert [c[0][2] for c in mock_send.call_args_list] == [65535, 65535]


class TestSelectResolver:
    def test_prefers_supplied_resolver(self) -> None:
        resolver = _StaticResolver([])
        assert select_resolver(ResolutionMode.INVENTORY, {ResolutionMode.INVENTORY: resolver}) is resolver

    def test_builds_inventory_from_settings(self) -> None:
        settings = Settings()
        settings.inventory.url = "https://inv.example.com"
        assert isinstance(select_resolver(ResolutionMode.INVENTORY, settings=settings), InventoryResolver)

    def test_builds_dhcp_from_settings(self) -> None:
        settings = Settings()
        settings.dhcp.servers = ["dhcp1"]
        resolver = select_resolver(ResolutionMode.DNS_DHCP, settings=settings)
        assert isinstance(resolver, DnsDhcpResolver)
        assert resolver.authorities.list_authorities() == ["dhcp1"]

    def test_inventory_without_url_raises(self) -> None:
        with pytest.raises(ConfigError):
            select_resolver(ResolutionMode.INVENTORY, settings=Settings())
