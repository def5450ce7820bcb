"""Loader configuration commands."""
