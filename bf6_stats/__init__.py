"""Battlefield 6 player stats card renderer."""

__version__ = "0.1.0"
