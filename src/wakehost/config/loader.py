"""YAML configuration loader and validator."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml

from wakehost.core.models import DeliveryMode, ResolutionMode
from wakehost.services.dhcp import LEASE_FORMATS


class ConfigError(Exception):
    """Raised for invalid or missing configuration."""


@dataclass
class InventorySettings:
    url: str = ""
    token: Optional[str] = None
    timeout: int = 30
    verify_tls: bool = True


@dataclass
class DhcpSettings:
    servers: list[str] = field(default_factory=list)
    lease_format: str = "dnsmasq"
    lease_file: Optional[str] = None
    ssh_user: str = "root"
    ssh_key: Optional[str] = None
    ssh_port: int = 22
    ssh_timeout: int = 30


@dataclass
class Settings:
    """Defaults for a wake invocation plus collaborator settings."""

    port: int = 9
    delivery: DeliveryMode = DeliveryMode.BROADCAST
    resolution: ResolutionMode = ResolutionMode.INVENTORY
    inventory: InventorySettings = field(default_factory=InventorySettings)
    dhcp: DhcpSettings = field(default_factory=DhcpSettings)


def load_config(path: Path) -> Optional[dict[str, Any]]:
    """
    Load configuration from a YAML file.

    Args:
        path: Path to the YAML config file

    Returns:
        Parsed configuration dictionary, or None if file is empty

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If YAML is invalid
    """
    with open(path) as f:
        result: Optional[dict[str, Any]] = yaml.safe_load(f)
        return result


def _section(config: dict[str, Any], name: str, errors: list[str]) -> dict[str, Any]:
    value = config.get(name) or {}
    if not isinstance(value, dict):
        errors.append(f"'{name}' must be a mapping")
        return {}
    return value


def _check_port(value: Any, where: str, errors: list[str]) -> None:
    try:
        port = int(value)
    except (TypeError, ValueError):
        errors.append(f"{where}: port must be an integer, got '{value}'")
        return
    if not 1 <= port <= 65535:
        errors.append(f"{where}: port {port} out of range 1-65535")


def _check_timeout(value: Any, where: str, errors: list[str]) -> None:
    try:
        timeout = int(value)
    except (TypeError, ValueError):
        errors.append(f"{where}: timeout must be an integer number of seconds, got '{value}'")
        return
    if timeout <= 0:
        errors.append(f"{where}: timeout must be positive, got {timeout}")


def validate_config(config: dict[str, Any]) -> list[str]:
    """
    Validate a loaded configuration dictionary.

    Returns:
        List of validation error messages (empty list = valid)
    """
    errors: list[str] = []

    if not isinstance(config, dict):
        return ["Config root must be a YAML mapping"]

    settings = _section(config, "settings", errors)
    if "port" in settings:
        _check_port(settings["port"], "settings", errors)
    delivery = settings.get("delivery")
    if delivery is not None and (
        not isinstance(delivery, str) or delivery not in {m.value for m in DeliveryMode}
    ):
        errors.append(f"settings: unknown delivery '{delivery}' (expected 'broadcast' or 'unicast')")
    resolution = settings.get("resolution")
    if resolution is not None and (
        not isinstance(resolution, str) or resolution not in {m.value for m in ResolutionMode}
    ):
        errors.append(
            f"settings: unknown resolution '{resolution}' (expected 'inventory' or 'dhcp')"
        )

    inventory = _section(config, "inventory", errors)
    url = inventory.get("url")
    if url and not str(url).startswith(("http://", "https://")):
        errors.append(f"inventory: url must start with http:// or https://, got '{url}'")
    if "timeout" in inventory:
        _check_timeout(inventory["timeout"], "inventory", errors)

    dhcp = _section(config, "dhcp", errors)
    servers = dhcp.get("servers")
    if servers is not None and not (
        isinstance(servers, list) and all(isinstance(s, str) and s for s in servers)
    ):
        errors.append("dhcp: 'servers' must be a list of host names")
    lease_format = dhcp.get("lease_format")
    if lease_format is not None and lease_format not in LEASE_FORMATS:
        errors.append(
            f"dhcp: unknown lease_format '{lease_format}' (expected one of {', '.join(LEASE_FORMATS)})"
        )
    if "ssh_port" in dhcp:
        _check_port(dhcp["ssh_port"], "dhcp", errors)
    if "ssh_timeout" in dhcp:
        _check_timeout(dhcp["ssh_timeout"], "dhcp", errors)

    if resolution == ResolutionMode.INVENTORY.value and not url:
        errors.append("inventory: 'url' is required when resolution is 'inventory'")
    if resolution == ResolutionMode.DNS_DHCP.value and not servers:
        errors.append("dhcp: 'servers' is required when resolution is 'dhcp'")
    # DHCP leases carry no subnet mask to broadcast on.
    if resolution == ResolutionMode.DNS_DHCP.value and delivery in (None, DeliveryMode.BROADCAST.value):
        errors.append(
            "settings: resolution 'dhcp' needs delivery 'unicast' (DHCP leases carry no subnet mask)"
        )

    return errors


def settings_from_config(config: Optional[dict[str, Any]]) -> Settings:
    """
    Construct Settings from a validated config dict, filling in defaults.

    Args:
        config: Parsed and validated config dictionary (or None)

    Returns:
        Settings instance
    """
    config = config or {}
    raw = config.get("settings") or {}
    inv = config.get("inventory") or {}
    dhcp = config.get("dhcp") or {}

    return Settings(
        port=int(raw.get("port", 9)),
        delivery=DeliveryMode(raw.get("delivery", DeliveryMode.BROADCAST.value)),
        resolution=ResolutionMode(raw.get("resolution", ResolutionMode.INVENTORY.value)),
        inventory=InventorySettings(
            url=str(inv.get("url", "")),
            token=inv.get("token"),
            timeout=int(inv.get("timeout", 30)),
            verify_tls=bool(inv.get("verify_tls", True)),
        ),
        dhcp=DhcpSettings(
            servers=list(dhcp.get("servers") or []),
            lease_format=dhcp.get("lease_format", "dnsmasq"),
            lease_file=dhcp.get("lease_file"),
            ssh_user=dhcp.get("ssh_user", "root"),
            ssh_key=dhcp.get("ssh_key"),
            ssh_port=int(dhcp.get("ssh_port", 22)),
            ssh_timeout=int(dhcp.get("ssh_timeout", 30)),
        ),
    )
