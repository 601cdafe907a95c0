"""
Step definitions for RFC2136 provider integration tests.
"""

from behave import given, then, when

from rfc2136_provider.core.record import Record
from rfc2136_provider.exceptions import RFC2136Error, UnsupportedRecordType


def _run(context, operation):
    try:
        applied = operation(context.test_zone, [context.record])
        context.applied.extend(applied)
        context.error = None
    except RFC2136Error as e:
        context.error = e


@given('a {record_type} record with value "{value}"')
def step_impl(context, record_type, value):
    """Set up the record used by the scenario."""
    context.record = Record(
        name=context.test_zone, type=record_type, value=value, ttl=300
    )


@when("I append the record")
def step_impl(context):
    _run(context, context.provider.append_records)


@when("I set the record")
def step_impl(context):
    _run(context, context.provider.set_records)


@when("I delete the record")
def step_impl(context):
    _run(context, context.provider.delete_records)
    assert context.error is None, f"Record deletion failed: {context.error}"
    context.applied = [r for r in context.applied if r != context.record]


@when("I list the zone")
def step_impl(context):
    context.zone_records = context.provider.get_records(context.test_zone)


def _txt_values(context, value):
    return [
        r for r in context.zone_records if r.type == "TXT" and r.value == value
    ]


@then('the zone contains a TXT record with value "{value}"')
def step_impl(context, value):
    assert _txt_values(context, value), f"No TXT record with value {value}"


@then('the zone contains exactly one TXT record with value "{value}"')
def step_impl(context, value):
    txt_records = [r for r in context.zone_records if r.type == "TXT"]
    assert [r.value for r in txt_records] == [value], f"TXT records: {txt_records}"


@then('the zone contains no TXT record with value "{value}"')
def step_impl(context, value):
    assert not _txt_values(context, value), f"TXT record {value} still present"


@then("the operation fails with an unsupported record type")
def step_impl(context):
    assert isinstance(context.error, UnsupportedRecordType), f"Got {context.error!r}"
