"""Mizan - Zakat and Khums obligation engine."""

__version__ = "0.1.0"
