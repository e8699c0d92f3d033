"""Buddy Exchange issue statistics for CODECHECK repositories."""

__version__ = "0.1.0"
