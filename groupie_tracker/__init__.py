"""Groupie tracker: concurrent catalog fetch, join, filter and search."""

__version__ = "0.1.0"
