"""Command-line interface for the Clash external controller.

This module provides the ``clash-cli`` commands, handling:
- Configuration file listing and switching
- Status overview (mode, ports, selected proxies)
- Routing mode changes
- Proxy group listing and selection
- Latency tests

Every command performs one short request/response exchange with the
controller and prints the result. Errors are reported on the console and
the command returns normally; only bad arguments make Typer exit non-zero.

Example:
    # Run from command line:
    $ clash-cli switch work
    $ clash-cli select Proxy "HK 01"
"""

import typer
from loguru import logger
from rich.console import Console
from rich.markup import escape
from rich.text import Text

from clash_cli import __version__
from clash_cli.core.api import ClashClient
from clash_cli.core.config import ClashConfig
from clash_cli.core.configs import list_config_files, resolve_config_path
from clash_cli.core.exceptions import (
    ApiConnectionError,
    ApiError,
    ApiResponseError,
    ConfigDirectoryError,
    ConfigNotFoundError,
)
from clash_cli.core.models import DaemonConfig, ProxyEntry, proxy_map, selector_groups
from clash_cli.core.utils import configure_logging, delay_style, format_delay

console = Console(highlight=False, emoji=False)
app = typer.Typer(
    help="A CLI tool to manage Clash proxy configurations, profiles and settings",
    no_args_is_help=True,
)

RUNNING_HINT = "Make sure Clash is running and external controller is enabled"
VALID_MODES = ("global", "rule", "direct")
STATUS_GROUPS = ("GLOBAL", "Proxy")


def echo(text: str, style: str | None = None) -> None:
    """Print plain text; names coming from the user or the daemon are never markup."""
    console.print(escape(text), style=style, soft_wrap=True)


def _client(ctx: typer.Context) -> ClashClient:
    config: ClashConfig = ctx.obj
    return ClashClient(config)


@app.callback()
def main(
    ctx: typer.Context,
    debug: bool = typer.Option(
        default=False,
        help="Enable debug logging",
    ),
):
    """Manage a running Clash instance through its external controller."""
    configure_logging(debug)
    ctx.obj = ClashConfig.from_env()
    logger.debug(f"clash-cli v{__version__}, controller at {ctx.obj.api_base_url}")


@app.command(name="list")
def list_configs(ctx: typer.Context):
    """List all available configurations."""
    config: ClashConfig = ctx.obj
    try:
        names = list_config_files(config.config_dir)
    except ConfigDirectoryError as e:
        echo(f"Error reading config directory: {e}", style="red")
        return

    echo("Available configurations:")
    for name in names:
        echo(f"  - {name}")


@app.command(name="switch")
def switch_config(
    ctx: typer.Context,
    config_file: str = typer.Argument(..., help="Configuration file name, .yaml is appended if missing"),
):
    """Switch to a different configuration."""
    config: ClashConfig = ctx.obj
    try:
        path = resolve_config_path(config.config_dir, config_file)
    except ConfigNotFoundError as e:
        echo(str(e), style="red")
        return

    with _client(ctx) as client:
        try:
            client.switch_config(str(path))
        except ApiConnectionError as e:
            echo(f"Error switching config: {e}", style="red")
            echo(RUNNING_HINT, style="yellow")
            return
        except ApiResponseError as e:
            echo(f"Failed to switch config: {e.body}", style="red")
            return

    logger.info(f"Switched configuration to {path}")
    echo(f"Successfully switched to {path.name}", style="green")


@app.command(name="status")
def status(ctx: typer.Context):
    """Get current Clash status."""
    with _client(ctx) as client:
        try:
            proxies_body = client.get_proxies()
        except ApiConnectionError as e:
            echo(f"Error getting proxy status: {e}", style="red")
            echo(RUNNING_HINT, style="yellow")
            return

        echo("Clash Status:", style="bold cyan")
        echo("============")

        try:
            daemon = DaemonConfig.from_api(client.get_configs())
        except ApiConnectionError as e:
            logger.debug(f"Could not fetch configs: {e}")
            daemon = DaemonConfig()

    if daemon.mode is not None:
        echo(f"Mode: {daemon.mode}")
    if daemon.port is not None:
        echo(f"HTTP Port: {daemon.port}")
    if daemon.socks_port is not None:
        echo(f"SOCKS Port: {daemon.socks_port}")

    proxies = proxy_map(proxies_body)
    if proxies is None:
        return

    echo("\nSelected Proxies:", style="bold cyan")
    for name in STATUS_GROUPS:
        group = ProxyEntry.from_api(name, proxies.get(name))
        if group is not None and group.now is not None:
            echo(f"  {name}: {group.now}")


@app.command(name="mode")
def set_mode(
    ctx: typer.Context,
    mode: str = typer.Argument(..., help="Global, Rule or Direct (case-insensitive)"),
):
    """Set Clash mode (Global, Rule, Direct)."""
    mode = mode.lower()
    if mode not in VALID_MODES:
        echo("Invalid mode. Use one of: Global, Rule, Direct", style="red")
        return

    with _client(ctx) as client:
        try:
            client.set_mode(mode)
        except ApiConnectionError as e:
            echo(f"Error setting mode: {e}", style="red")
            return
        except ApiResponseError as e:
            echo(f"Failed to set mode: {e.body}", style="red")
            return

    echo(f"Successfully set mode to {mode}", style="green")


@app.command(name="select")
def select_proxy(
    ctx: typer.Context,
    group: str = typer.Argument(..., help="Selector group name"),
    proxy: str = typer.Argument(..., help="Member of the group to select"),
):
    """Select a proxy from a group."""
    with _client(ctx) as client:
        try:
            client.select_proxy(group, proxy)
        except ApiConnectionError as e:
            echo(f"Error selecting proxy: {e}", style="red")
            return
        except ApiResponseError as e:
            echo(f"Failed to select proxy: {e.body}", style="red")
            return

    echo(f"Successfully selected {proxy} in group {group}", style="green")


@app.command(name="proxies")
def list_proxies(ctx: typer.Context):
    """List all proxy groups and proxies."""
    with _client(ctx) as client:
        try:
            body = client.get_proxies()
        except ApiConnectionError as e:
            echo(f"Error getting proxies: {e}", style="red")
            return

    proxies = proxy_map(body)
    if proxies is None:
        return

    echo("Proxy Groups:", style="bold cyan")
    echo("============")
    for group in selector_groups(proxies):
        echo(f"\n[{group.name}]", style="bold")
        for index, member in enumerate(group.all, start=1):
            if member is None:
                continue
            marker = "*" if member == group.now else " "
            echo(f"  {marker} {index}. {member}", style="green" if marker == "*" else None)


@app.command(name="test")
def test_latency(
    ctx: typer.Context,
    proxy: str = typer.Argument(..., help="Proxy to test"),
):
    """Test proxy latency."""
    with _client(ctx) as client:
        try:
            result = client.delay_test(proxy)
        except ApiConnectionError as e:
            echo(f"Error testing latency: {e}", style="red")
            return

    if result.delay is None:
        echo(f"Failed to test latency: {result.body}", style="red")
        return

    echo(f"Proxy: {proxy}, Latency: {format_delay(result.delay)}")


@app.command(name="check")
def check(ctx: typer.Context):
    """Test the selected node of every proxy group."""
    with _client(ctx) as client:
        try:
            body = client.get_proxies()
        except ApiConnectionError as e:
            echo(f"Error getting proxies: {e}", style="red")
            echo(RUNNING_HINT, style="yellow")
            return

        groups = sorted(selector_groups(proxy_map(body) or {}), key=lambda g: g.name)
        if not groups:
            echo("No proxy groups found.")
            return

        echo("Checking selected nodes...")
        for group in groups:
            if group.now is None:
                continue
            line = Text(f"{group.name}: ", style="cyan")
            line.append(f"{group.now}", style="yellow")
            line.append(" ... ")
            try:
                result = client.delay_test(group.now)
            except ApiError as e:
                logger.debug(f"Delay test for {group.now} failed: {e}")
                result = None

            if result is None or result.delay is None:
                line.append("timeout/error", style="red")
            else:
                line.append(format_delay(result.delay), style=delay_style(result.delay))
            console.print(line, soft_wrap=True)


@app.command(name="version")
def version(ctx: typer.Context):
    """Show the Clash core version."""
    with _client(ctx) as client:
        try:
            info = client.get_version()
        except ApiConnectionError as e:
            echo(f"Error getting version: {e}", style="red")
            echo(RUNNING_HINT, style="yellow")
            return

    if info.version is None:
        echo(f"Failed to get version: {info.body}", style="red")
        return

    suffix = " (Premium)" if info.premium else ""
    echo(f"Clash version: {info.version}{suffix}")


if __name__ == "__main__":
    app()
