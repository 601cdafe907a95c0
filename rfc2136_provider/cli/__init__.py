"""
Command-line interface components.

This package contains CLI tools and entry points for the RFC2136 provider.
"""

from .main import main

__all__ = ["main"]
