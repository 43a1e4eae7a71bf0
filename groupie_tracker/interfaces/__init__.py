"""Abstract interfaces for swappable external collaborators."""

from groupie_tracker.interfaces.catalog_source import ICatalogSource

__all__ = ["ICatalogSource"]
