"""Catalog-driven generate-and-submit automation engine."""

__version__ = "0.1.0"
