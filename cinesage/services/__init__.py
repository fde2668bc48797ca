"""Catalog, advisory and analysis services."""
