"""Core SOCKS4 client implementation.

This package contains the components behind the public API:
- Wire format (request and reply frames)
- The handshake engine and socket factory
- Target resolution
- Exception hierarchy
- Logging configuration

The core package holds everything needed to tunnel a TCP connection
through a SOCKS4 proxy, kept apart from the command-line interface.
"""
