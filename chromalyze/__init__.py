"""Dominant colour extraction service."""
