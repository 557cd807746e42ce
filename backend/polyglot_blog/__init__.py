"""Multilingual blog backend comparing three translation storage patterns."""

__version__ = "1.0.0"
