"""Wealth Odyssey projection backend."""

__version__ = "0.1.0"
