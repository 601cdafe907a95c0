"""
Utility functions and helpers.

This package contains input validation and nameserver address handling.
"""

from .nameserver import normalize_nameserver, split_host_port
from .validators import validate_fqdn, validate_record_type, validate_ttl

__all__ = [
    "normalize_nameserver",
    "split_host_port",
    "validate_fqdn",
    "validate_record_type",
    "validate_ttl",
]
