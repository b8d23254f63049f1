"""Resolve which icon variant each platform has on the icon host."""

__version__ = "0.1.0"
