"""
Command-line interface components.

This package contains the CLI entry point for the Constellix client.
"""

from .main import main

__all__ = ["main"]
