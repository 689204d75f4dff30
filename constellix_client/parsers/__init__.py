"""
Payload file parsers.

This package loads request payloads for the CLI from JSON or YAML files.
"""

from .payload import PayloadParser

__all__ = ["PayloadParser"]
