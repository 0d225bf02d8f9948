"""Asyncio client library for the Freenet Client Protocol (FCP 2.0)."""

__version__ = "0.1.0"