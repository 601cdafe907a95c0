"""
DNS provider implementations.

This package contains the RFC2136 dynamic update provider, its transport
and TSIG support, and an in-memory mock provider.
"""

from .base_provider import DNSProvider
from .dns_client import DNSClient
from .mock_provider import MockDNSProvider
from .rfc2136_provider import RFC2136Provider

__all__ = ["DNSClient", "DNSProvider", "RFC2136Provider", "MockDNSProvider"]
