"""Cycle personal metric summaries through Discord rich presence."""

__version__ = "0.1.0"
