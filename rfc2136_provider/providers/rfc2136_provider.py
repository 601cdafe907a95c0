"""
RFC2136 DNS provider implementation.

This module manages records on any nameserver that accepts RFC2136 dynamic
updates, optionally signing requests with TSIG, using the dnspython library.
"""

import logging
import threading
import time
from contextlib import contextmanager
from typing import Dict, List, Optional

import dns.message

from ..core.query import query_zone
from ..core.record import Record, UpdateMode
from ..core.transaction import build_update
from ..core.translator import OWNER_RECORD, OWNER_ZONE
from ..exceptions import ConfigurationError, NetworkFailure, RFC2136Error
from ..utils.nameserver import normalize_nameserver
from .auth import TSIGAuthenticator
from .base_provider import DNSProvider
from .transport import DEFAULT_TIMEOUT, TransportClient

logger = logging.getLogger(__name__)


class RFC2136Provider(DNSProvider):
    """
    DNS provider speaking RFC2136 dynamic updates to a single nameserver.

    Every public operation holds one provider-wide lock for its whole
    duration, so calls on the same instance never overlap on the wire, even
    for different zones. Each record is sent in its own transaction; an
    operation stops at the first failing record and the raised error carries
    the records applied before it in ``applied``.

    The ``timeout`` accepted by each operation is a deadline for the whole
    call, covering the wait for the lock and every exchange.
    """

    def __init__(self, config: Dict, transport: Optional[TransportClient] = None):
        """Initialize RFC2136 provider."""
        self.config = config
        self.nameserver = config.get("nameserver", "")
        if not self.nameserver:
            raise ConfigurationError("RFC2136 provider requires a nameserver")

        self.owner_name = config.get("owner_name", OWNER_ZONE)
        if self.owner_name not in (OWNER_ZONE, OWNER_RECORD):
            raise ConfigurationError(
                f"owner_name must be '{OWNER_ZONE}' or '{OWNER_RECORD}', "
                f"got {self.owner_name!r}"
            )

        self.sign_queries = bool(config.get("sign_queries", False))
        self.authenticator = TSIGAuthenticator.from_config(config)
        self.transport = transport or TransportClient(
            protocol=config.get("protocol", "tcp"),
            timeout=float(config.get("timeout", DEFAULT_TIMEOUT)),
        )
        self._lock = threading.Lock()

        logger.info(
            f"RFC2136 provider initialized for nameserver {self.nameserver}"
            f" (TSIG {'enabled' if self.authenticator else 'disabled'})"
        )

    @staticmethod
    def _deadline(timeout: Optional[float]) -> Optional[float]:
        return None if timeout is None else time.monotonic() + timeout

    @staticmethod
    def _remaining(deadline: Optional[float]) -> Optional[float]:
        if deadline is None:
            return None
        remaining = deadline - time.monotonic()
        if remaining <= 0:
            raise NetworkFailure("deadline exceeded")
        return remaining

    @contextmanager
    def _locked(self, deadline: Optional[float]):
        remaining = self._remaining(deadline)
        if not self._lock.acquire(timeout=-1 if remaining is None else remaining):
            raise NetworkFailure("deadline exceeded waiting for provider lock")
        try:
            yield
        finally:
            self._lock.release()

    def _exchange(
        self,
        message: dns.message.Message,
        address: str,
        deadline: Optional[float],
        sign: bool = True,
    ) -> dns.message.Message:
        if sign and self.authenticator is not None:
            self.authenticator.attach(message)
        return self.transport.exchange(
            message, address, timeout=self._remaining(deadline)
        )

    def get_records(self, zone: str, timeout: Optional[float] = None) -> List[Record]:
        """List all records the nameserver returns for an ANY query on the zone."""
        deadline = self._deadline(timeout)
        try:
            with self._locked(deadline):
                address = normalize_nameserver(self.nameserver)
                records = query_zone(
                    zone,
                    lambda query: self._exchange(
                        query, address, deadline, sign=self.sign_queries
                    ),
                )
        except RFC2136Error as e:
            e.annotate("list records")
            logger.error(f"Failed to get records for zone {zone}: {e.message}")
            raise

        logger.info(f"Retrieved {len(records)} records for zone {zone}")
        return records

    def append_records(
        self, zone: str, records: List[Record], timeout: Optional[float] = None
    ) -> List[Record]:
        """Add records without touching existing data in their RRsets."""
        return self._apply(zone, records, UpdateMode.APPEND, timeout)

    def set_records(
        self, zone: str, records: List[Record], timeout: Optional[float] = None
    ) -> List[Record]:
        """Replace the RRset of each record's name and type with its value."""
        return self._apply(zone, records, UpdateMode.SET, timeout)

    def delete_records(
        self, zone: str, records: List[Record], timeout: Optional[float] = None
    ) -> List[Record]:
        """Delete the exact value of each record."""
        return self._apply(zone, records, UpdateMode.DELETE, timeout)

    def _apply(
        self,
        zone: str,
        records: List[Record],
        mode: UpdateMode,
        timeout: Optional[float],
    ) -> List[Record]:
        deadline = self._deadline(timeout)
        applied: List[Record] = []
        record = None
        try:
            with self._locked(deadline):
                address = normalize_nameserver(self.nameserver)
                for record in records:
                    update = build_update(zone, record, mode, owner=self.owner_name)
                    self._exchange(update, address, deadline)
                    applied.append(record)
                    logger.debug(
                        f"Applied {mode.value} of {record.name} {record.type} "
                        f"{record.value} in {zone}"
                    )
        except RFC2136Error as e:
            e.annotate(mode.value, record, applied)
            logger.error(f"{e} ({len(applied)}/{len(records)} applied)")
            raise

        logger.info(f"Applied {mode.value} to {len(applied)} records in zone {zone}")
        return applied
