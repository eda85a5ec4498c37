"""Visor - personal finance metrics toolkit."""

__version__ = "0.4.0"
