"""Gradebook analyzer: class score sheet averages, total cross-check and rankings."""

__version__ = "0.1.0"
