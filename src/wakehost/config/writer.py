"""Atomic YAML config write-back for wakehost."""

import os
from pathlib import Path
from typing import Any

import yaml

from wakehost.config.loader import Settings


def settings_to_raw(settings: Settings) -> dict[str, Any]:
    """Serialize Settings back to the raw YAML dict format the loader expects."""
    inventory: dict[str, Any] = {
        "url": settings.inventory.url,
        "timeout": settings.inventory.timeout,
        "verify_tls": settings.inventory.verify_tls,
    }
    if settings.inventory.token:
        inventory["token"] = settings.inventory.token

    dhcp: dict[str, Any] = {
        "servers": list(settings.dhcp.servers),
        "lease_format": settings.dhcp.lease_format,
        "ssh_user": settings.dhcp.ssh_user,
        "ssh_port": settings.dhcp.ssh_port,
        "ssh_timeout": settings.dhcp.ssh_timeout,
    }
    if settings.dhcp.lease_file:
        dhcp["lease_file"] = settings.dhcp.lease_file
    if settings.dhcp.ssh_key:
        dhcp["ssh_key"] = settings.dhcp.ssh_key

    return {
        "settings": {
            "port": settings.port,
            "delivery": settings.delivery.value,
            "resolution": settings.resolution.value,
        },
        "inventory": inventory,
        "dhcp": dhcp,
    }


def default_config() -> dict[str, Any]:
    """Starter config written by `wakehost config init`."""
    config = settings_to_raw(Settings())
    config["inventory"]["url"] = "https://inventory.example.com/api"
    config["dhcp"]["servers"] = ["dhcp1.example.com"]
    return config


def write_config(path: Path, config: dict[str, Any]) -> None:
    """
    Atomically write a config dict to a YAML file.

    Uses a temp-file + os.replace so a crash mid-write never leaves a
    half-written file.

    Args:
        path: Destination config.yaml path.
        config: Full config dict (settings + inventory + dhcp).
    """
    tmp = path.with_suffix(".yaml.tmp")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(tmp, "w", encoding="utf-8") as f:
            yaml.dump(
                config,
                f,
                default_flow_style=False,
                allow_unicode=True,
                sort_keys=False,
            )
        os.replace(tmp, path)
    except Exception:
        # Clean up temp file on failure
        if tmp.exists():
            tmp.unlink(missing_ok=True)
        raise
