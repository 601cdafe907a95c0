"""
Zone Query Engine - list the records a nameserver holds for a zone
"""

import logging
from typing import Callable, List

import dns.message
import dns.rdataclass
import dns.rdatatype

from .record import Record
from .translator import from_rrset, parse_zone

logger = logging.getLogger(__name__)


def make_zone_query(zone: str) -> dns.message.QueryMessage:
    """Build an ANY query of class IN for the zone name, recursion desired."""
    return dns.message.make_query(
        parse_zone(zone), dns.rdatatype.ANY, dns.rdataclass.IN
    )


def query_zone(
    zone: str, exchange: Callable[[dns.message.Message], dns.message.Message]
) -> List[Record]:
    """
    Query a zone and translate every answer record.

    The answer set is returned in server order without filtering, so SOA
    and NS records the server includes are part of the result.

    Args:
        zone: Zone name to query
        exchange: Sends the query and returns the classified reply; its
            errors propagate unchanged

    Returns:
        List of records
    """
    response = exchange(make_zone_query(zone))

    records = []
    for rrset in response.answer:
        records.extend(from_rrset(rrset))

    logger.debug(f"Query for {zone} returned {len(records)} records")
    return records
