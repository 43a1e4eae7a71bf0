"""Catalog services: store, fetcher, joiner, filter, search and the query facade."""
