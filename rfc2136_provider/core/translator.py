"""
Record Translator - mapping between Records and wire resource records

This module converts protocol-agnostic Records into dnspython rdata bound to
an owner name and TTL, and renders answers received from a nameserver back
into Records.
"""

import logging
from typing import List, NamedTuple

import dns.exception
import dns.name
import dns.rdata
import dns.rdataclass
import dns.rdatatype
import dns.rrset
from dns.rdtypes.ANY.TXT import TXT

from ..exceptions import InvalidRecordValue, UnsupportedRecordType
from .record import Record

logger = logging.getLogger(__name__)

SUPPORTED_TYPES = {
    "A": dns.rdatatype.A,
    "AAAA": dns.rdatatype.AAAA,
    "CNAME": dns.rdatatype.CNAME,
    "MX": dns.rdatatype.MX,
    "TXT": dns.rdatatype.TXT,
}

DEFAULT_MX_PREFERENCE = 0

OWNER_ZONE = "zone"
OWNER_RECORD = "record"


class WireRecord(NamedTuple):
    """A single resource record of class IN."""

    name: dns.name.Name
    ttl: int
    rdata: dns.rdata.Rdata

    @property
    def rdtype(self) -> int:
        return self.rdata.rdtype


def parse_zone(zone: str) -> dns.name.Name:
    """Parse a zone name, raising InvalidRecordValue when it is malformed."""
    try:
        return dns.name.from_text(zone)
    except dns.exception.DNSException as e:
        raise InvalidRecordValue(f"invalid zone {zone!r}: {e}") from e


def _owner_name(zone_name: dns.name.Name, record: Record, owner: str) -> dns.name.Name:
    if owner == OWNER_ZONE:
        return zone_name
    try:
        return dns.name.from_text(record.name, origin=zone_name)
    except dns.exception.DNSException as e:
        raise InvalidRecordValue(f"invalid record name {record.name!r}: {e}") from e


def _make_rdata(record_type: str, value: str) -> dns.rdata.Rdata:
    rdtype = SUPPORTED_TYPES[record_type]

    if rdtype == dns.rdatatype.TXT:
        return TXT(dns.rdataclass.IN, rdtype, [value])

    if rdtype == dns.rdatatype.MX and len(value.split()) == 1:
        value = f"{DEFAULT_MX_PREFERENCE} {value}"

    # Names inside values are always taken as absolute
    return dns.rdata.from_text(
        dns.rdataclass.IN,
        rdtype,
        value,
        origin=dns.name.root,
        relativize=False,
    )


def to_wire(zone: str, record: Record, owner: str = OWNER_ZONE) -> WireRecord:
    """
    Translate a record into a wire resource record.

    Args:
        zone: Zone the record belongs to
        record: Record to translate
        owner: "zone" to use the zone name as owner name, "record" to use
            the record's own name qualified against the zone

    Returns:
        The wire record

    Raises:
        UnsupportedRecordType: The type is not A, AAAA, CNAME, MX or TXT
        InvalidRecordValue: The zone, owner name, value or TTL is malformed
    """
    record_type = record.type.upper()
    if record_type not in SUPPORTED_TYPES:
        raise UnsupportedRecordType(record.type)
    if owner not in (OWNER_ZONE, OWNER_RECORD):
        raise ValueError(f"unknown owner mode {owner!r}")

    ttl = record.ttl_seconds
    if ttl < 0 or ttl > 0xFFFFFFFF:
        raise InvalidRecordValue(f"TTL {ttl} does not fit in 32 bits")

    name = _owner_name(parse_zone(zone), record, owner)

    try:
        rdata = _make_rdata(record_type, record.value)
    except (dns.exception.DNSException, ValueError) as e:
        raise InvalidRecordValue(
            f"invalid {record_type} value {record.value!r}: {e}"
        ) from e

    return WireRecord(name=name, ttl=ttl, rdata=rdata)


def _presentation(rdata: dns.rdata.Rdata) -> str:
    if rdata.rdtype == dns.rdatatype.TXT:
        return b"".join(rdata.strings).decode("utf-8", errors="replace")
    return rdata.to_text()


def from_wire(wire: WireRecord) -> Record:
    """Render a wire resource record of any type as a Record."""
    return Record(
        name=wire.name.to_text(),
        type=dns.rdatatype.to_text(wire.rdata.rdtype),
        value=_presentation(wire.rdata),
        ttl=wire.ttl,
    )


def from_rrset(rrset: dns.rrset.RRset) -> List[Record]:
    """Render every rdata of an RRset, in order."""
    return [from_wire(WireRecord(rrset.name, rrset.ttl, rdata)) for rdata in rrset]
