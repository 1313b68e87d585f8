"""Nagoya-bae photo scoring and mascot generation."""

__version__ = "0.1.0"
