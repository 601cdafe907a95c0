"""
Transaction Builder - RFC2136 update messages for single records

Each record gets its own update message so that a failure is confined to
that record.
"""

import logging

import dns.update

from .record import Record, UpdateMode
from .translator import OWNER_ZONE, to_wire

logger = logging.getLogger(__name__)


def build_update(
    zone: str, record: Record, mode: UpdateMode, owner: str = OWNER_ZONE
) -> dns.update.UpdateMessage:
    """
    Build the update message applying one record to a zone.

    APPEND adds the record and leaves the existing RRset alone, so duplicates
    depend on the server's RRset handling. DELETE removes exactly the
    translated value. SET removes the whole RRset for the owner name and type
    before adding the record, leaving a single value.

    Raises:
        UnsupportedRecordType: The record type cannot be translated
        InvalidRecordValue: The record value does not parse
    """
    wire = to_wire(zone, record, owner=owner)
    update = dns.update.UpdateMessage(zone)

    if mode is UpdateMode.APPEND:
        update.add(wire.name, wire.ttl, wire.rdata)
    elif mode is UpdateMode.DELETE:
        update.delete(wire.name, wire.rdata)
    elif mode is UpdateMode.SET:
        update.delete(wire.name, wire.rdtype)
        update.add(wire.name, wire.ttl, wire.rdata)
    else:
        raise ValueError(f"unknown update mode {mode!r}")

    logger.debug(
        f"Built {mode.value} transaction for {record.name} {record.type} in {zone}"
    )
    return update
