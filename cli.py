"""CLI entry point for agent-chat-proxy."""

import sys
from datetime import datetime

from rich.console import Console
from rich.table import Table

from app import create_app
from core.config import Config, check_upstream, load_config
from core.exceptions import ConfigurationError
from ui.dashboard import Dashboard
from ui.log_utils import clear_logs, mask, write_cli_log

console = Console()


def main():
    """Main CLI entry point."""
    config = load_config()

    # Handle CLI arguments
    if len(sys.argv) > 1:
        arg = sys.argv[1]

        if arg == "--check":
            sys.exit(_print_status(config))

        if arg == "--config":
            _print_config(config)
            return

        if arg in ("--help", "-h"):
            _print_help()
            return

    try:
        check_upstream(config)
    except ConfigurationError as e:
        console.print(f"[yellow]Warning:[/yellow] {e}")

    # Clear previous logs and start dashboard
    clear_logs()
    dashboard = Dashboard(config)

    import uvicorn

    app = create_app(config, dashboard)

    # Run with dashboard
    uvicorn_config = uvicorn.Config(
        app,
        host=config.proxy.host,
        port=config.proxy.port,
        log_level="warning",
    )
    server = uvicorn.Server(uvicorn_config)

    dashboard.start()
    start_time = datetime.now()
    write_cli_log("STARTUP", "Proxy started", port=config.proxy.port, upstream=config.upstream.base_url)
    try:
        server.run()
    finally:
        duration = datetime.now() - start_time
        write_cli_log("SHUTDOWN", "Proxy stopped", duration=str(duration))
        dashboard.stop()


def _print_status(config: Config) -> int:
    """Print upstream and auth status, returning the process exit code."""
    try:
        check_upstream(config)
    except ConfigurationError as e:
        console.print(f"[red][ERROR][/red] {e}")
        return 1

    console.print(f"[green]Upstream[/green] {config.upstream.base_url}")
    if config.has_basic_auth:
        console.print(f"[green]Basic auth[/green] enabled for user {config.upstream.username}")
    else:
        console.print("[yellow]Basic auth[/yellow] disabled (set BASIC_AUTH_USERNAME and BASIC_AUTH_PASSWORD)")
    return 0


def _print_config(config: Config) -> None:
    """Print the resolved configuration with credentials masked."""
    table = Table(show_header=True, header_style="bold")
    table.add_column("Setting")
    table.add_column("Value")

    table.add_row("host", config.proxy.host)
    table.add_row("port", str(config.proxy.port))
    table.add_row("route prefix", config.proxy.route_prefix)
    table.add_row("debug", str(config.proxy.debug))
    table.add_row("upstream", config.upstream.base_url or "[dim]-[/dim]")
    table.add_row("username", config.upstream.username or "[dim]-[/dim]")
    table.add_row("password", mask(config.upstream.password) if config.upstream.password else "[dim]-[/dim]")
    table.add_row("timeout", str(config.upstream.timeout) if config.upstream.timeout else "none")
    for name, value in config.public_settings().items():
        table.add_row(name, str(value))

    console.print(table)


def _print_help():
    """Print help message."""
    help_text = """
[bold cyan]Agent Chat Proxy[/bold cyan]

Forwards /api/* to the LangGraph server at LANGGRAPH_API_URL, adding basic auth and CORS headers.

[bold]Usage:[/bold]
    agent-chat-proxy              Start with live dashboard
    agent-chat-proxy --check      Check upstream and auth settings
    agent-chat-proxy --config     Show resolved configuration
    agent-chat-proxy --help       Show this help

[bold]Environment:[/bold]
    LANGGRAPH_API_URL                          Upstream base URL
    BASIC_AUTH_USERNAME, BASIC_AUTH_PASSWORD   Optional basic auth credentials
    HOST, PORT, PROXY_ROUTE_PREFIX             Listen address and route prefix
    PROXY_TIMEOUT, PROXY_DEBUG                 Upstream timeout (seconds), request logs
"""
    console.print(help_text)


if __name__ == "__main__":
    main()
