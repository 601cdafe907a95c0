"""
DNS Client - Unified interface for DNS providers

This module provides a common interface over the configured provider,
currently RFC2136 dynamic updates or the in-memory mock.
"""

import logging
from typing import Dict, List, Optional

from ..core.record import Record
from ..exceptions import ConfigurationError
from .base_provider import DNSProvider
from .mock_provider import MockDNSProvider
from .rfc2136_provider import RFC2136Provider

logger = logging.getLogger(__name__)

PROVIDERS = {
    "rfc2136": RFC2136Provider,
    "mock": MockDNSProvider,
}


class DNSClient:
    """Unified DNS client that supports multiple providers."""

    def __init__(self, config: Dict):
        """Initialize DNS client with configuration."""
        self.config = config
        self.provider = self._get_provider()

    def _get_provider(self) -> DNSProvider:
        """Get DNS provider based on configuration."""
        provider_name = self.config.get("default_provider", "rfc2136")
        provider_config = self.config.get("dns_providers", {}).get(provider_name) or {}

        provider_class = PROVIDERS.get(provider_name)
        if provider_class is None:
            raise ConfigurationError(
                f"Unknown provider '{provider_name}', expected one of {sorted(PROVIDERS)}"
            )
        logger.debug(f"Using {provider_name} provider")
        return provider_class(provider_config)

    def get_records(self, zone: str, timeout: Optional[float] = None) -> List[Record]:
        """List all records in a zone."""
        return self.provider.get_records(zone, timeout=timeout)

    def append_records(
        self, zone: str, records: List[Record], timeout: Optional[float] = None
    ) -> List[Record]:
        """Add records to a zone."""
        return self.provider.append_records(zone, records, timeout=timeout)

    def set_records(
        self, zone: str, records: List[Record], timeout: Optional[float] = None
    ) -> List[Record]:
        """Replace the RRset of each record."""
        return self.provider.set_records(zone, records, timeout=timeout)

    def delete_records(
        self, zone: str, records: List[Record], timeout: Optional[float] = None
    ) -> List[Record]:
        """Delete records from a zone."""
        return self.provider.delete_records(zone, records, timeout=timeout)
