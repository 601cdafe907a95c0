#!/usr/bin/env python3
"""
Tests for record translation, transaction building and address handling.
"""

import unittest
from datetime import timedelta

import dns.name
import dns.rdataclass
import dns.rdatatype
import dns.rrset

from rfc2136_provider.core.record import Record, UpdateMode
from rfc2136_provider.core.transaction import build_update
from rfc2136_provider.core.translator import (
    OWNER_RECORD,
    from_rrset,
    from_wire,
    to_wire,
)
from rfc2136_provider.exceptions import (
    AddressNormalizationSkipped,
    InvalidRecordValue,
    NetworkFailure,
    UnsupportedRecordType,
)
from rfc2136_provider.utils.nameserver import normalize_nameserver, split_host_port
from rfc2136_provider.utils.validators import (
    validate_fqdn,
    validate_record_type,
    validate_ttl,
)

ZONE = "example.org."


class TestRecordTranslator(unittest.TestCase):
    """Test translation between records and wire records."""

    def test_round_trip_supported_types(self):
        """Name, TTL and value survive to_wire followed by from_wire."""
        records = [
            Record(name=ZONE, type="A", value="127.0.0.1", ttl=300),
            Record(name=ZONE, type="AAAA", value="2001:db8::1", ttl=600),
            Record(name=ZONE, type="CNAME", value="target.example.net.", ttl=60),
            Record(name=ZONE, type="TXT", value="v=spf1 -all", ttl=3600),
        ]

        for record in records:
            with self.subTest(type=record.type):
                result = from_wire(to_wire(ZONE, record))
                self.assertEqual(result.name, record.name)
                self.assertEqual(result.type, record.type)
                self.assertEqual(result.ttl, record.ttl)
                self.assertEqual(result.value, record.value)

    def test_aaaa_value_is_canonicalized(self):
        record = Record(name=ZONE, type="AAAA", value="2001:0db8:0000::0001", ttl=300)
        self.assertEqual(from_wire(to_wire(ZONE, record)).value, "2001:db8::1")

    def test_cname_target_is_absolute(self):
        record = Record(name=ZONE, type="CNAME", value="target.example.net", ttl=300)
        self.assertEqual(from_wire(to_wire(ZONE, record)).value, "target.example.net.")

    def test_mx_with_preference(self):
        record = Record(name=ZONE, type="MX", value="10 mail.example.org.", ttl=300)
        wire = to_wire(ZONE, record)
        self.assertEqual(wire.rdata.preference, 10)
        self.assertEqual(from_wire(wire).value, "10 mail.example.org.")

    def test_mx_without_preference_uses_default(self):
        record = Record(name=ZONE, type="MX", value="mail.example.org.", ttl=300)
        wire = to_wire(ZONE, record)
        self.assertEqual(wire.rdata.preference, 0)
        self.assertEqual(from_wire(wire).value, "0 mail.example.org.")

    def test_txt_is_single_chunk(self):
        record = Record(name=ZONE, type="TXT", value="hello world", ttl=300)
        wire = to_wire(ZONE, record)
        self.assertEqual(wire.rdata.strings, (b"hello world",))

    def test_owner_defaults_to_zone(self):
        record = Record(name="test.example.org.", type="A", value="10.0.0.1", ttl=300)
        wire = to_wire(ZONE, record)
        self.assertEqual(wire.name, dns.name.from_text(ZONE))
        self.assertEqual(wire.rdata.rdclass, dns.rdataclass.IN)

    def test_owner_from_record_name(self):
        for name in ("test", "test.example.org."):
            with self.subTest(name=name):
                record = Record(name=name, type="A", value="10.0.0.1", ttl=300)
                wire = to_wire(ZONE, record, owner=OWNER_RECORD)
                self.assertEqual(wire.name, dns.name.from_text("test.example.org."))

    def test_record_owner_round_trip(self):
        record = Record(name="test.example.org.", type="TXT", value="v1", ttl=300)
        self.assertEqual(from_wire(to_wire(ZONE, record, owner=OWNER_RECORD)), record)

    def test_invalid_zone_is_not_blamed_on_value(self):
        record = Record(name=ZONE, type="TXT", value="v1", ttl=300)
        with self.assertRaises(InvalidRecordValue) as ctx:
            to_wire("a..example.org.", record)
        self.assertIn("invalid zone", str(ctx.exception))

    def test_invalid_record_name(self):
        record = Record(name="a..b", type="A", value="10.0.0.1", ttl=300)
        with self.assertRaises(InvalidRecordValue) as ctx:
            to_wire(ZONE, record, owner=OWNER_RECORD)
        self.assertIn("invalid record name", str(ctx.exception))

    def test_timedelta_ttl(self):
        record = Record(name=ZONE, type="A", value="10.0.0.1", ttl=timedelta(minutes=5))
        self.assertEqual(to_wire(ZONE, record).ttl, 300)

    def test_unsupported_type(self):
        record = Record(name=ZONE, type="SRV", value="0 5 5060 sip.example.org.", ttl=300)
        with self.assertRaises(UnsupportedRecordType) as ctx:
            to_wire(ZONE, record)
        self.assertEqual(ctx.exception.record_type, "SRV")

    def test_invalid_values(self):
        invalid = [
            Record(name=ZONE, type="A", value="not-an-ip", ttl=300),
            Record(name=ZONE, type="A", value="2001:db8::1", ttl=300),
            Record(name=ZONE, type="AAAA", value="127.0.0.1", ttl=300),
            Record(name=ZONE, type="MX", value="ten mail.example.org.", ttl=300),
            Record(name=ZONE, type="TXT", value="x" * 256, ttl=300),
            Record(name=ZONE, type="A", value="10.0.0.1", ttl=-1),
            Record(name=ZONE, type="A", value="10.0.0.1", ttl=2**32),
        ]

        for record in invalid:
            with self.subTest(record=record):
                with self.assertRaises(InvalidRecordValue):
                    to_wire(ZONE, record)

    def test_from_rrset_keeps_other_types(self):
        soa = dns.rrset.from_text(
            ZONE,
            3600,
            "IN",
            "SOA",
            "ns1.example.org. admin.example.org. 1 7200 3600 1209600 3600",
        )

        records = from_rrset(soa)

        self.assertEqual(len(records), 1)
        self.assertEqual(records[0].type, "SOA")
        self.assertEqual(records[0].ttl, 3600)
        self.assertEqual(
            records[0].value,
            "ns1.example.org. admin.example.org. 1 7200 3600 1209600 3600",
        )

    def test_from_rrset_expands_every_rdata(self):
        rrset = dns.rrset.from_text(ZONE, 300, "IN", "A", "10.0.0.1", "10.0.0.2")
        values = sorted(r.value for r in from_rrset(rrset))
        self.assertEqual(values, ["10.0.0.1", "10.0.0.2"])


class TestTransactionBuilder(unittest.TestCase):
    """Test update message construction per mode."""

    def setUp(self):
        self.record = Record(name="test.example.org.", type="TXT", value="v1", ttl=300)

    def test_zone_section(self):
        update = build_update(ZONE, self.record, UpdateMode.APPEND)
        self.assertEqual(len(update.zone), 1)
        self.assertEqual(update.zone[0].name, dns.name.from_text(ZONE))
        self.assertEqual(update.zone[0].rdtype, dns.rdatatype.SOA)

    def test_append_only_inserts(self):
        update = build_update(ZONE, self.record, UpdateMode.APPEND)

        self.assertEqual(len(update.update), 1)
        rrset = update.update[0]
        self.assertIsNone(rrset.deleting)
        self.assertEqual(rrset.rdtype, dns.rdatatype.TXT)
        self.assertEqual(rrset.ttl, 300)
        self.assertEqual(len(rrset), 1)

    def test_delete_removes_value(self):
        update = build_update(ZONE, self.record, UpdateMode.DELETE)

        self.assertEqual(len(update.update), 1)
        rrset = update.update[0]
        self.assertEqual(rrset.deleting, dns.rdataclass.NONE)
        self.assertEqual(rrset.rdtype, dns.rdatatype.TXT)
        self.assertEqual(rrset.ttl, 0)
        self.assertEqual(list(rrset)[0].strings, (b"v1",))

    def test_set_removes_rrset_then_inserts(self):
        update = build_update(ZONE, self.record, UpdateMode.SET)

        self.assertEqual(len(update.update), 2)
        removal, insertion = update.update
        self.assertEqual(removal.deleting, dns.rdataclass.ANY)
        self.assertEqual(removal.rdtype, dns.rdatatype.TXT)
        self.assertEqual(len(removal), 0)
        self.assertIsNone(insertion.deleting)
        self.assertEqual(len(insertion), 1)

    def test_unsupported_type_builds_nothing(self):
        record = Record(name=ZONE, type="SRV", value="0 5 5060 sip.example.org.", ttl=300)
        with self.assertRaises(UnsupportedRecordType):
            build_update(ZONE, record, UpdateMode.SET)


class TestNameserver(unittest.TestCase):
    """Test nameserver address normalization."""

    def test_missing_port_gets_default(self):
        self.assertEqual(normalize_nameserver("ns.example.org"), "ns.example.org:53")
        self.assertEqual(normalize_nameserver("127.0.0.1"), "127.0.0.1:53")
        self.assertEqual(normalize_nameserver("[2001:db8::1]"), "[2001:db8::1]:53")

    def test_explicit_port_unchanged(self):
        for address in ("ns.example.org:5353", "127.0.0.1:53", "[::1]:5353"):
            with self.subTest(address=address):
                self.assertEqual(normalize_nameserver(address), address)

    def test_malformed_address_passes_through(self):
        for address in ("2001:db8::1", "ns.example.org:", "ns.example.org:dns", "[::1]:"):
            with self.subTest(address=address):
                with self.assertWarns(AddressNormalizationSkipped):
                    self.assertEqual(normalize_nameserver(address), address)

    def test_split_host_port(self):
        self.assertEqual(split_host_port("127.0.0.1:5353"), ("127.0.0.1", 5353))
        self.assertEqual(split_host_port("[::1]:53"), ("::1", 53))

    def test_split_rejects_unusable_addresses(self):
        for address in ("2001:db8::1", "127.0.0.1:", "127.0.0.1:dns", ":53", "h:70000"):
            with self.subTest(address=address):
                with self.assertRaises(NetworkFailure):
                    split_host_port(address)


class TestValidators(unittest.TestCase):
    """Test the validation functions."""

    def test_validate_fqdn(self):
        for name in ("example.org", "example.org.", "_acme-challenge.example.org", "@", "*.example.org"):
            with self.subTest(name=name):
                self.assertTrue(validate_fqdn(name))
        for name in ("", ".", "example..org", "-bad.example.org", "a" * 64 + ".org"):
            with self.subTest(name=name):
                self.assertFalse(validate_fqdn(name))

    def test_validate_record_type(self):
        self.assertTrue(validate_record_type("A"))
        self.assertTrue(validate_record_type("txt"))
        self.assertFalse(validate_record_type("SRV"))
        self.assertFalse(validate_record_type(""))

    def test_validate_ttl(self):
        self.assertTrue(validate_ttl(0))
        self.assertTrue(validate_ttl("300"))
        self.assertFalse(validate_ttl(-1))
        self.assertFalse(validate_ttl(2**32))
        self.assertFalse(validate_ttl("soon"))


if __name__ == "__main__":
    unittest.main(verbosity=2)
