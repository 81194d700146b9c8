"""Tests for subnet broadcast arithmetic."""

import pytest

from wakehost.core.broadcast import compute_broadcast, parse_ipv4
from wakehost.core.errors import ErrorKind, ValidationError


class TestComputeBroadcast:
    def test_class_c_subnet(self) -> None:
        assert compute_broadcast("192.168.1.50", "255.255.255.0") == "192.168.1.255"

    def test_class_b_subnet(self) -> None:
        assert compute_broadcast("10.20.30.40", "255.255.0.0") == "10.20.255.255"

    def test_non_octet_aligned_mask(self) -> None:
        assert compute_broadcast("172.16.5.10", "255.255.252.0") == "172.16.7.255"

    def test_host_mask_returns_host(self) -> None:
        assert compute_broadcast("10.0.0.7", "255.255.255.255") == "10.0.0.7"

    def test_zero_mask_returns_limited_broadcast(self) -> None:
        assert compute_broadcast("10.0.0.7", "0.0.0.0") == "255.255.255.255"

    def test_tolerates_surrounding_whitespace(self) -> None:
        assert compute_broadcast(" 192.168.1.50 ", "255.255.255.0") == "192.168.1.255"

    @pytest.mark.parametrize(
        "ip, mask",
        [
            ("192.168.1", "255.255.255.0"),
            ("192.168.1.256", "255.255.255.0"),
            ("192.168.1.50", "not-a-mask"),
            ("fe80::1", "255.255.255.0"),
            (None, "255.255.255.0"),
            ("192.168.1.50", None),
        ],
    )
    def test_malformed_input_raises(self, ip: object, mask: object) -> None:
        with pytest.raises(ValidationError) as exc_info:
            compute_broadcast(ip, mask)  # type: ignore[arg-type]
        assert exc_info.value.kind is ErrorKind.MALFORMED_ADDRESS


class TestParseIpv4:
    def test_returns_address(self) -> None:
        assert str(parse_ipv4("10.1.2.3")) == "10.1.2.3"

    def test_rejects_empty_string(self) -> None:
        with pytest.raises(ValidationError):
            parse_ipv4("")
