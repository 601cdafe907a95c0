"""
Mock DNS provider for testing and demonstration.

This module provides a mock DNS provider that stores records in memory
for safe testing and demonstration purposes. Records go through the same
translation as the RFC2136 provider, with the same ``owner_name`` setting,
so invalid input fails the same way and records land at the same names.
"""

import logging
from typing import Dict, List, Optional

import dns.name

from ..core.record import Record
from ..core.translator import OWNER_RECORD, OWNER_ZONE, from_wire, parse_zone, to_wire
from ..exceptions import ConfigurationError
from .base_provider import DNSProvider

logger = logging.getLogger(__name__)


def _key(record: Record):
    return (record.name.lower(), record.type)


class MockDNSProvider(DNSProvider):
    """Mock DNS provider for testing and demonstration purposes."""

    def __init__(self, config: Optional[Dict] = None):
        """Initialize mock provider."""
        config = config or {}
        self.owner_name = config.get("owner_name", OWNER_ZONE)
        if self.owner_name not in (OWNER_ZONE, OWNER_RECORD):
            raise ConfigurationError(
                f"owner_name must be '{OWNER_ZONE}' or '{OWNER_RECORD}', "
                f"got {self.owner_name!r}"
            )
        self.records: List[Record] = []
        logger.info("Mock DNS provider initialized")

    def _canonical(self, zone: str, record: Record) -> Record:
        return from_wire(to_wire(zone, record, owner=self.owner_name))

    def get_records(self, zone: str, timeout: Optional[float] = None) -> List[Record]:
        """Get the records owned by the zone name itself, as an ANY query would."""
        origin = parse_zone(zone)
        records = [r for r in self.records if dns.name.from_text(r.name) == origin]
        logger.info(f"Mock: Retrieved {len(records)} records")
        return records

    def append_records(
        self, zone: str, records: List[Record], timeout: Optional[float] = None
    ) -> List[Record]:
        """Add records; a value already in its RRset is not duplicated."""
        for record in records:
            canonical = self._canonical(zone, record)
            if not any(self._same_value(r, canonical) for r in self.records):
                self.records.append(canonical)
            logger.info(f"Mock: Appended {canonical.name} {canonical.type} {canonical.value}")
        return list(records)

    def set_records(
        self, zone: str, records: List[Record], timeout: Optional[float] = None
    ) -> List[Record]:
        """Replace the RRset of each record with its single value."""
        for record in records:
            canonical = self._canonical(zone, record)
            self.records = [r for r in self.records if _key(r) != _key(canonical)]
            self.records.append(canonical)
            logger.info(f"Mock: Set {canonical.name} {canonical.type} {canonical.value}")
        return list(records)

    def delete_records(
        self, zone: str, records: List[Record], timeout: Optional[float] = None
    ) -> List[Record]:
        """Delete the exact value of each record; missing values are ignored."""
        for record in records:
            canonical = self._canonical(zone, record)
            self.records = [
                r for r in self.records if not self._same_value(r, canonical)
            ]
            logger.info(f"Mock: Deleted {canonical.name} {canonical.type} {canonical.value}")
        return list(records)

    @staticmethod
    def _same_value(a: Record, b: Record) -> bool:
        return _key(a) == _key(b) and a.value == b.value
