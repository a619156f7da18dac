"""Command-line interface for the SOCKS4 client.

This module provides a small diagnostic tool built on Typer and Rich for:
- Running a SOCKS4 CONNECT handshake against a proxy
- Showing the outcome in a table
- Optionally sending a payload through the tunnel and printing the reply

Example:
    # Check that a proxy lets us reach example.com:80
    $ socks4-client connect socks4://127.0.0.1:1080 example.com 80 --send 'HEAD / HTTP/1.0\\r\\n\\r\\n'
"""

import codecs
import contextlib

import typer
from loguru import logger
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from socks4_client import __version__
from socks4_client.core.config import HandshakeConfig
from socks4_client.core.exceptions import ProxyError
from socks4_client.core.network import ProxyEndpoint
from socks4_client.core.proxy import open_tunnel
from socks4_client.core.utils.log_config import LOG_DIR, configure_logging
from socks4_client.core.utils.utils import format_bytes

console = Console()
app = typer.Typer(help="SOCKS4 proxy client")

DEFAULT_READ_SIZE = 4096


@app.callback(invoke_without_command=True)
def version_callback():
    """Show version information."""
    console.print(f"[cyan]SOCKS4 client v{__version__}[/cyan]")


def _result_table(proxy: ProxyEndpoint, host: str, port: int, local: str, status: str) -> Table:
    table = Table(title="SOCKS4 handshake")
    table.add_column("Property", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Proxy", f"{proxy.host}:{proxy.port}")
    table.add_row("Target", f"{host}:{port}")
    table.add_row("Local address", local)
    table.add_row("Status", status)
    return table


@app.command(name="connect")
def connect(
    proxy_url: str = typer.Argument(..., help="Proxy URL, e.g. socks4://user@127.0.0.1:1080"),
    host: str = typer.Argument(..., help="Target host name or IPv4 address"),
    port: int = typer.Argument(..., min=0, max=65535, help="Target port"),
    timeout: float | None = typer.Option(None, "--timeout", "-t", min=0.001, help="Connect/read timeout in seconds"),
    strict_drain: bool = typer.Option(
        default=False,
        help="Fail if the proxy reply is shorter than 8 bytes",
    ),
    nameserver: list[str] | None = typer.Option(
        None, "--nameserver", "-n", help="Fallback nameserver for target resolution (repeatable)"
    ),
    send: str | None = typer.Option(None, "--send", "-s", help="Payload to send once connected (\\r\\n escapes allowed)"),
    read: int = typer.Option(DEFAULT_READ_SIZE, "--read", "-r", min=1, help="Bytes of reply to print after --send"),
    debug: bool = typer.Option(
        default=False,
        help="Enable debug logging",
    ),
):
    """Open a tunnel through a SOCKS4 proxy and report the outcome."""
    configure_logging("DEBUG" if debug else "WARNING", LOG_DIR / "client.log" if debug else None)

    try:
        proxy = ProxyEndpoint.from_url(proxy_url)
    except ValueError as e:
        console.print(f"[red]Invalid proxy URL: {escape(str(e))}")
        raise typer.Exit(code=2) from e

    config = HandshakeConfig(timeout=timeout, strict_drain=strict_drain, nameservers=tuple(nameserver or ()))

    try:
        with console.status(f"Connecting to {host}:{port} through {proxy.host}:{proxy.port}..."):
            sock = open_tunnel(proxy, host, port, config)
    except ProxyError as e:
        logger.debug(f"Handshake failed: {e!r}")
        console.print(_result_table(proxy, host, port, "-", f"[red]{type(e).__name__}"))
        console.print(f"[red]Error: {escape(str(e))}")
        raise typer.Exit(code=1) from e
    except ValueError as e:
        console.print(f"[red]Invalid settings: {escape(str(e))}")
        raise typer.Exit(code=2) from e

    with contextlib.closing(sock):
        local_host, local_port = sock.getsockname()[:2]
        console.print(_result_table(proxy, host, port, f"{local_host}:{local_port}", "granted"))

        if send is None:
            return

        payload = codecs.decode(send, "unicode_escape").encode("latin-1")
        try:
            sock.sendall(payload)
            reply = sock.recv(read)
        except OSError as e:
            console.print(f"[red]Error talking to {host}:{port}: {escape(str(e))}")
            raise typer.Exit(code=1) from e

        console.print(f"[green]Sent {format_bytes(len(payload))}, received {format_bytes(len(reply))}")
        if reply:
            console.print(escape(reply.decode("utf-8", errors="replace")), highlight=False)


if __name__ == "__main__":
    app()
