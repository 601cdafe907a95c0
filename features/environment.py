"""
Behave environment configuration for RFC2136 provider integration tests.

The scenarios talk to a real nameserver that accepts dynamic updates for
the test zone. They are skipped when it cannot be reached.
"""

import logging
import os

from rfc2136_provider.exceptions import RFC2136Error
from rfc2136_provider.providers.rfc2136_provider import RFC2136Provider

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def before_all(context):
    """Set up test environment before all tests."""
    context.test_zone = os.environ.get("RFC2136_TEST_ZONE", "test.example.org.")

    context.test_config = {
        "nameserver": os.environ.get("RFC2136_NAMESERVER", "127.0.0.1:53"),
        "tsig_keyname": os.environ.get("RFC2136_TSIG_KEYNAME", "update-key"),
        "tsig_secret": os.environ.get("RFC2136_TSIG_SECRET", ""),
        "tsig_algorithm": os.environ.get("RFC2136_TSIG_ALGORITHM", "hmac-sha256"),
        "timeout": 5,
    }

    context.nameserver_running = _check_nameserver_running(
        context.test_config, context.test_zone
    )
    if not context.nameserver_running:
        logger.warning("Nameserver is not reachable. Scenarios will be skipped.")

    logger.info("Test environment setup complete")


def before_scenario(context, scenario):
    """Set up each test scenario."""
    if not context.nameserver_running:
        scenario.skip("Nameserver is not reachable")
        return

    context.provider = RFC2136Provider(context.test_config)
    context.applied = []
    logger.info(f"Starting scenario: {scenario.name}")


def after_scenario(context, scenario):
    """Clean up after each test scenario."""
    if not context.nameserver_running or not getattr(context, "applied", None):
        return
    try:
        context.provider.delete_records(context.test_zone, context.applied)
    except RFC2136Error as e:
        logger.warning(f"Failed to cleanup test records: {e}")

    logger.info(f"Completed scenario: {scenario.name}")


def _check_nameserver_running(config, zone) -> bool:
    """Check that the nameserver answers queries for the test zone."""
    try:
        RFC2136Provider(config).get_records(zone, timeout=2)
        return True
    except RFC2136Error:
        return False
