"""Command-line interface for wakehost."""

import logging
import sys
from pathlib import Path
from typing import Optional

import click

from wakehost import __version__
from wakehost.config.loader import Settings
from wakehost.core.models import DeliveryMode, OperationReport, ResolutionMode

DEFAULT_CONFIG = Path.home() / ".config" / "wakehost" / "config.yaml"


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
        datefmt="%H:%M:%S",
    )


def _load_settings(config: str) -> Settings:
    from wakehost.config.loader import load_config, settings_from_config, validate_config

    path = Path(config)
    if not path.exists():
        click.echo(f"Config file not found: {path}", err=True)
        click.echo("Run 'wakehost config init' to create one.", err=True)
        sys.exit(1)
    raw = load_config(path)
    if not raw:
        click.echo("Config file is empty.", err=True)
        sys.exit(1)
    errors = validate_config(raw)
    if errors:
        click.echo("Config validation errors:", err=True)
        for e in errors:
            click.echo(f"  • {e}", err=True)
        sys.exit(1)
    return settings_from_config(raw)


def _print_report(report: OperationReport) -> None:
    if report.is_empty:
        click.echo(f"No adapters with a MAC and IPv4 address found for {report.host_name}.")
        return
    for outcome in report.outcomes:
        mac = outcome.adapter.mac_address
        dest = outcome.destination or outcome.adapter.ipv4
        if outcome.success:
            click.echo(f"✓  {mac}  →  {dest}:{report.port} ({report.delivery_mode.value})")
        else:
            click.echo(f"✗  {mac}  →  {dest}: {outcome.error}", err=True)


# ── Root group ────────────────────────────────────────────────────────────────


@click.group()
@click.version_option(version=__version__, prog_name="wakehost")
@click.option(
    "--config",
    "-c",
    default=str(DEFAULT_CONFIG),
    envvar="WAKEHOST_CONFIG",
    show_default=True,
    help="Path to wakehost config.yaml",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx: click.Context, config: str, verbose: bool) -> None:
    """wakehost: wake a machine by name with a Wake-on-LAN magic packet."""
    _setup_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["config"] = config


# ── wake command ─────────────────────────────────────────────────────────────


@main.command()
@click.argument("host")
@click.option("--port", "-p", type=click.IntRange(1, 65535), help="UDP port (usually 9 or 7)")
@click.option(
    "--broadcast",
    "delivery",
    flag_value=DeliveryMode.BROADCAST.value,
    help="Send to each adapter's subnet broadcast address",
)
@click.option(
    "--unicast",
    "delivery",
    flag_value=DeliveryMode.UNICAST.value,
    help="Send straight to each adapter's IP (needs ARP offload on the target)",
)
@click.option(
    "--inventory",
    "resolution",
    flag_value=ResolutionMode.INVENTORY.value,
    help="Resolve adapters through the device inventory",
)
@click.option(
    "--dhcp",
    "resolution",
    flag_value=ResolutionMode.DNS_DHCP.value,
    help="Resolve the address via DNS and the MAC via the DHCP lease",
)
@click.option(
    "--require-adapters",
    is_flag=True,
    help="Fail when no adapters are found instead of doing nothing",
)
@click.pass_context
def wake(
    ctx: click.Context,
    host: str,
    port: Optional[int],
    delivery: Optional[str],
    resolution: Optional[str],
    require_adapters: bool,
) -> None:
    """Send a Wake-on-LAN packet to every adapter of HOST."""
    settings = _load_settings(ctx.obj["config"])

    from wakehost.config.loader import ConfigError
    from wakehost.core.errors import ResolutionError
    from wakehost.core.orchestrator import wake as do_wake

    delivery_mode = DeliveryMode(delivery) if delivery else settings.delivery
    resolution_mode = ResolutionMode(resolution) if resolution else settings.resolution

    try:
        report = do_wake(
            host,
            port=port or settings.port,
            delivery_mode=delivery_mode,
            resolution_mode=resolution_mode,
            settings=settings,
            require_adapters=require_adapters,
        )
    except (ResolutionError, ConfigError) as exc:
        click.echo(f"✗  Could not resolve {host}: {exc}", err=True)
        sys.exit(1)

    _print_report(report)
    if not report.success:
        sys.exit(2)


# ── resolve command ──────────────────────────────────────────────────────────


@main.command()
@click.argument("host")
@click.option("--inventory", "resolution", flag_value=ResolutionMode.INVENTORY.value)
@click.option("--dhcp", "resolution", flag_value=ResolutionMode.DNS_DHCP.value)
@click.pass_context
def resolve(ctx: click.Context, host: str, resolution: Optional[str]) -> None:
    """Show the adapters HOST resolves to, without sending anything."""
    settings = _load_settings(ctx.obj["config"])

    from wakehost.config.loader import ConfigError
    from wakehost.core.errors import ResolutionError
    from wakehost.core.orchestrator import select_resolver

    mode = ResolutionMode(resolution) if resolution else settings.resolution
    try:
        adapters = select_resolver(mode, settings=settings).resolve(host)
    except (ResolutionError, ConfigError) as exc:
        click.echo(f"✗  Could not resolve {host}: {exc}", err=True)
        sys.exit(1)

    if not adapters:
        click.echo(f"No adapters with a MAC and IPv4 address found for {host}.")
        return
    click.echo(f"{'MAC ADDRESS':<20} {'IPV4':<18} {'SUBNET MASK'}")
    click.echo("─" * 56)
    for a in adapters:
        click.echo(f"{a.mac_address:<20} {a.ipv4:<18} {a.subnet_mask or '-'}")


# ── config group ─────────────────────────────────────────────────────────────


@main.group("config")
def config_group() -> None:
    """Create and check the wakehost config file."""


@config_group.command("init")
@click.option("--force", is_flag=True, help="Overwrite an existing config file")
@click.pass_context
def config_init(ctx: click.Context, force: bool) -> None:
    """Write a starter config file."""
    from wakehost.config.writer import default_config, write_config

    path = Path(ctx.obj["config"])
    if path.exists() and not force:
        click.echo(f"Config file already exists: {path} (use --force to overwrite)", err=True)
        sys.exit(1)
    write_config(path, default_config())
    click.echo(f"Wrote starter config to {path}")


@config_group.command("check")
@click.pass_context
def config_check(ctx: click.Context) -> None:
    """Validate the config file."""
    settings = _load_settings(ctx.obj["config"])
    click.echo(
        f"Config OK: resolution={settings.resolution.value} "
        f"delivery={settings.delivery.value} port={settings.port}"
    )


if __name__ == "__main__":
    main()
