"""Command line interface modules.

This package provides the command-line tools for:
- Opening a tunnel through a SOCKS4 proxy
- Sending a probe payload through it
- Reporting handshake results and errors
"""
