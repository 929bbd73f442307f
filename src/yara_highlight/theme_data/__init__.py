"""Bundled highlight themes."""
