"""Catalog source providers."""

from groupie_tracker.providers.catalog.http_catalog_source import HttpCatalogSource

__all__ = ["HttpCatalogSource"]
