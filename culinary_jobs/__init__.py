"""Culinary job aggregation: search, filter, enrich and persist job listings."""

__version__ = "0.3.0"
