"""Utility functions and helpers."""

from socks4_client.core.utils.utils import format_bytes, format_frame

__all__ = ["format_bytes", "format_frame"]
