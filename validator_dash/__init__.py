"""Validator and preconfirmation dashboard."""

__version__ = "0.1.0"
