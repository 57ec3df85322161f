"""Utility helpers: image buffers and logging setup."""
