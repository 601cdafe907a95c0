"""
Nameserver address handling.

Addresses are accepted as ``host``, ``host:port``, ``[v6]`` or ``[v6]:port``.
Hostnames are not resolved; the transport expects an IP literal.
"""

import logging
import warnings
from typing import Tuple

from ..exceptions import AddressNormalizationSkipped, NetworkFailure

logger = logging.getLogger(__name__)

DEFAULT_PORT = 53


class _MissingPort(ValueError):
    pass


def _split(address: str) -> Tuple[str, str]:
    """Split ``host:port`` the way socket addresses are written."""
    if address.startswith("["):
        end = address.find("]")
        if end < 0:
            raise ValueError(f"missing ']' in address {address!r}")
        rest = address[end + 1:]
        if not rest:
            raise _MissingPort(address)
        if not rest.startswith(":"):
            raise ValueError(f"unexpected text after ']' in address {address!r}")
        host, port = address[1:end], rest[1:]
    else:
        colons = address.count(":")
        if colons == 0:
            raise _MissingPort(address)
        if colons > 1:
            raise ValueError(f"too many colons in address {address!r}")
        host, port = address.split(":")

    if not port.isdigit():
        raise ValueError(f"invalid port {port!r} in address {address!r}")
    return host, port


def normalize_nameserver(address: str) -> str:
    """
    Append the default DNS port to an address that has none.

    Args:
        address: Nameserver address, with or without a port

    Returns:
        The address with an explicit port, or the input unchanged when it
        already has one or cannot be parsed
    """
    try:
        _split(address)
    except _MissingPort:
        return f"{address}:{DEFAULT_PORT}"
    except ValueError as e:
        logger.warning(f"Passing nameserver address through unchanged: {e}")
        warnings.warn(str(e), AddressNormalizationSkipped, stacklevel=2)
    return address


def split_host_port(address: str) -> Tuple[str, int]:
    """Split a normalized address into host and numeric port."""
    try:
        host, port = _split(address)
    except ValueError as e:
        raise NetworkFailure(f"invalid nameserver address {address!r}: {e}") from e

    if not host or int(port) > 65535:
        raise NetworkFailure(f"invalid nameserver address {address!r}")
    return host, int(port)
