"""Command line interface for geostring."""
