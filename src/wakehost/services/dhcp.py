"""DHCP lease lookup on remote lease servers."""

import logging
import re
from typing import Optional

import paramiko

from wakehost.core.errors import ErrorKind, ResolutionError
from wakehost.services.ssh import read_remote_file

logger = logging.getLogger(__name__)

LEASE_FORMATS = ("dnsmasq", "isc")
DEFAULT_LEASE_FILES = {
    "dnsmasq": "/var/lib/misc/dnsmasq.leases",
    "isc": "/var/lib/dhcp/dhcpd.leases",
}

# ISC dhcpd.leases is append-only: a later block for the same address
# supersedes earlier ones.
_ISC_LEASE_RE = re.compile(r"lease\s+(\S+)\s*\{(.*?)\}", re.DOTALL)
_ISC_HARDWARE_RE = re.compile(r"hardware\s+ethernet\s+([0-9A-Fa-f:]+)\s*;")
_ISC_STATE_RE = re.compile(r"^\s*binding\s+state\s+(\w+)\s*;", re.MULTILINE)


def parse_dnsmasq_leases(text: str) -> dict[str, str]:
    """
    Parse a dnsmasq lease file into {ip: mac}.

    Each line: <expiry> <mac> <ip> <hostname> <client-id>
    """
    leases: dict[str, str] = {}
    for line in text.splitlines():
        fields = line.split()
        if len(fields) < 3 or fields[0] == "duid":
            continue
        _expiry, mac, ip = fields[:3]
        leases[ip] = mac
    return leases


def parse_isc_leases(text: str) -> dict[str, str]:
    """Parse an ISC dhcpd.leases file into {ip: mac} for active bindings."""
    leases: dict[str, str] = {}
    for ip, body in _ISC_LEASE_RE.findall(text):
        state = _ISC_STATE_RE.search(body)
        hardware = _ISC_HARDWARE_RE.search(body)
        if state and state.group(1) != "active":
            leases.pop(ip, None)
            continue
        if hardware:
            leases[ip] = hardware.group(1)
    return leases


_PARSERS = {"dnsmasq": parse_dnsmasq_leases, "isc": parse_isc_leases}


class SshLeaseService:
    """Reads the lease file on a DHCP server over SSH and looks up an address."""

    def __init__(
        self,
        lease_format: str = "dnsmasq",
        lease_file: Optional[str] = None,
        ssh_user: str = "root",
        ssh_port: int = 22,
        ssh_key: Optional[str] = None,
        connect_timeout: int = 30,
    ) -> None:
        if lease_format not in _PARSERS:
            raise ValueError(f"Unsupported lease format: {lease_format}")
        self.lease_format = lease_format
        self.lease_file = lease_file or DEFAULT_LEASE_FILES[lease_format]
        self.ssh_user = ssh_user
        self.ssh_port = ssh_port
        self.ssh_key = ssh_key
        self.connect_timeout = connect_timeout

    def lookup_lease(self, server: str, ip: str) -> Optional[str]:
        try:
            text = read_remote_file(
                server,
                self.lease_file,
                user=self.ssh_user,
                port=self.ssh_port,
                key_path=self.ssh_key,
                connect_timeout=self.connect_timeout,
            )
        except (paramiko.SSHException, OSError) as exc:
            raise ResolutionError(
                ErrorKind.SERVICE_UNAVAILABLE,
                f"Could not read {self.lease_file} on DHCP server {server}: {exc}",
            ) from exc

        leases = _PARSERS[self.lease_format](text)
        logger.debug("Parsed %d lease(s) from %s:%s", len(leases), server, self.lease_file)
        return leases.get(ip)


class StaticAuthorityDirectory:
    """DHCP servers taken from configuration, in the configured order."""

    def __init__(self, servers: list[str]) -> None:
        self.servers = list(servers)

    def list_authorities(self) -> list[str]:
        return list(self.servers)
