"""Flood zone classification of land parcels."""

__version__ = "0.0.1"
