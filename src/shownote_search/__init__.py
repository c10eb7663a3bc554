"""Podcast show-note extraction and link search server."""

__version__ = "0.1.0"
