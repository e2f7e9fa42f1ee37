"""Adapters layer for the bf6-stats card renderer.

This layer contains the adapters that talk to external systems: the stats
API and remote image hosts.
"""
