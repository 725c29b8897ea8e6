"""Spline paths, arc-length sampling and constraint-based motion profiles."""

__version__ = "0.1.0"