"""Paginated data access for the inventory console API."""

__version__ = "0.1.0"
