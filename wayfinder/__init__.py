"""Wayfinder API: nearby points of interest for location-triggered audio tours."""

__version__ = "1.0.0"
