"""
RFC2136 Provider - DNS record management over dynamic updates

Lists, appends, replaces and deletes DNS records on any nameserver that
accepts RFC2136 dynamic updates, optionally authenticated with TSIG.
"""

__version__ = "1.0.0"
__author__ = "RFC2136 Provider Team"
__description__ = "DNS record management over RFC2136 dynamic updates"

from .core.dns_manager import DNSManager
from .core.record import Record, UpdateMode
from .providers.dns_client import DNSClient
from .providers.rfc2136_provider import RFC2136Provider

__all__ = [
    "DNSManager",
    "DNSClient",
    "RFC2136Provider",
    "Record",
    "UpdateMode",
]
