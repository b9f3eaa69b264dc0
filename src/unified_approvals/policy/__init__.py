"""Monetary threshold policy."""
