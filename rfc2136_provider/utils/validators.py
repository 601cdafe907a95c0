"""
Validators - Input validation for DNS records

This module provides validation functions for record names, types and TTLs
read from user input, before they reach the record translator.
"""

import logging
import re

from ..core.translator import SUPPORTED_TYPES

logger = logging.getLogger(__name__)

MAX_TTL = 2**32 - 1


def validate_fqdn(fqdn: str) -> bool:
    """
    Validate a domain name, absolute (trailing dot) or relative.

    Args:
        fqdn: The name to validate

    Returns:
        True if valid, False otherwise
    """
    if not fqdn or not isinstance(fqdn, str):
        return False

    name = fqdn[:-1] if fqdn.endswith(".") else fqdn

    # The zone apex may be written as "@"
    if name == "@":
        return True

    if not name or len(name) > 253:
        logger.warning(f"Invalid name length: {fqdn}")
        return False

    for label in name.split("."):
        if not _validate_label(label):
            logger.warning(f"Invalid label '{label}' in name: {fqdn}")
            return False

    return True


def _validate_label(label: str) -> bool:
    """Validate a single domain label."""
    if len(label) == 0 or len(label) > 63:
        return False

    # Underscores are allowed for service labels such as _acme-challenge
    return re.match(r"^[a-zA-Z0-9_*]([a-zA-Z0-9_-]*[a-zA-Z0-9_])?$", label) is not None


def validate_record_type(record_type: str) -> bool:
    """Check that a type mnemonic can be translated to a wire record."""
    if not record_type or not isinstance(record_type, str):
        return False
    if record_type.upper() not in SUPPORTED_TYPES:
        logger.warning(f"Unsupported record type: {record_type}")
        return False
    return True


def validate_ttl(ttl) -> bool:
    """Check that a TTL is a whole number of seconds within 32 bits."""
    try:
        value = int(ttl)
    except (TypeError, ValueError):
        logger.warning(f"Invalid TTL: {ttl}")
        return False
    if value < 0 or value > MAX_TTL:
        logger.warning(f"TTL out of range: {ttl}")
        return False
    return True
