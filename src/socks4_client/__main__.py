"""Allow ``python -m socks4_client``."""

from socks4_client.cmd.cli import app

app()
