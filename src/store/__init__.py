"""Metrics sinks.

This package writes decoded metrics documents to warehouse tables or
newline-delimited JSON export files, one destination per category.
"""
