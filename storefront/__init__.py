"""Async storefront client for a remote commerce API."""

__version__ = "0.1.0"
