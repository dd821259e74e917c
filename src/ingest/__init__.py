"""Metrics file acquisition.

This package fetches one metrics object and decodes it into an
immutable MetricsDocument, then hands it to a sink.
"""
