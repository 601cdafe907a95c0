"""
Base DNS provider interface.

This module defines the abstract base class that all DNS providers must implement.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from ..core.record import Record


class DNSProvider(ABC):
    """Abstract base class for DNS providers."""

    @abstractmethod
    def get_records(self, zone: str, timeout: Optional[float] = None) -> List[Record]:
        """List all records in a zone."""
        pass

    @abstractmethod
    def append_records(
        self, zone: str, records: List[Record], timeout: Optional[float] = None
    ) -> List[Record]:
        """Add records to a zone and return the records added."""
        pass

    @abstractmethod
    def set_records(
        self, zone: str, records: List[Record], timeout: Optional[float] = None
    ) -> List[Record]:
        """Replace the RRset of each record and return the records set."""
        pass

    @abstractmethod
    def delete_records(
        self, zone: str, records: List[Record], timeout: Optional[float] = None
    ) -> List[Record]:
        """Delete records from a zone and return the records deleted."""
        pass
