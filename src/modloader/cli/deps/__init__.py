"""Dependency inspection commands."""
