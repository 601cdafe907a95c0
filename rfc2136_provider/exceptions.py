"""
Exceptions raised by the RFC2136 provider.

Every expected protocol or network failure is an RFC2136Error. The provider
annotates errors with the operation and record they occurred during, and with
the records that had already been applied when the failure happened.
"""

from typing import List, Optional


class RFC2136Error(Exception):
    """Base class for provider errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
        self.operation: Optional[str] = None
        self.record = None
        self.applied: List = []

    def annotate(self, operation: str, record=None, applied: Optional[List] = None):
        """Attach the operation context and return self for re-raising."""
        self.operation = operation
        self.record = record
        self.applied = list(applied or [])
        return self

    def __str__(self) -> str:
        if self.operation is None:
            return self.message
        if self.record is None:
            return f"failed to {self.operation}: {self.message}"
        return (
            f"failed to {self.operation} record "
            f"{self.record.name} {self.record.type}: {self.message}"
        )


class UnsupportedRecordType(RFC2136Error, ValueError):
    """The record type mnemonic cannot be translated to a wire record."""

    def __init__(self, record_type: str):
        super().__init__(f"unsupported type {record_type}")
        self.record_type = record_type


class InvalidRecordValue(RFC2136Error, ValueError):
    """The record value or TTL does not parse for its type."""


class NetworkFailure(RFC2136Error):
    """Timeout, refused connection, malformed reply or unusable address."""


class ServerRejected(RFC2136Error):
    """The server answered with a non-success response code."""

    def __init__(self, rcode: str):
        super().__init__(f"server replied {rcode}")
        self.rcode = rcode


class AuthenticationFailed(RFC2136Error):
    """TSIG verification failed on either side of the exchange."""


class ConfigurationError(RFC2136Error, ValueError):
    """The provider configuration is unusable."""


class AddressNormalizationSkipped(UserWarning):
    """The nameserver address was malformed and passed through unchanged."""
