"""
Transport client for DNS request/reply exchanges.

One call sends one message and waits for exactly one reply. Identical
requests issued concurrently through the same client are coalesced: the
first goes on the wire and the others share its outcome. Nothing is retried.
"""

import copy
import logging
import threading
from typing import Dict, Hashable, Optional

import dns.exception
import dns.message
import dns.query
import dns.rcode
import dns.tsig

from ..exceptions import (
    AuthenticationFailed,
    ConfigurationError,
    NetworkFailure,
    RFC2136Error,
    ServerRejected,
)
from ..utils.nameserver import split_host_port

logger = logging.getLogger(__name__)

PROTOCOLS = ("tcp", "udp")
DEFAULT_TIMEOUT = 30.0

_TSIG_ERRORS = (
    dns.tsig.PeerError,
    dns.tsig.BadSignature,
    dns.tsig.BadTime,
    dns.message.UnknownTSIGKey,
)


class _Call:
    """An exchange in flight that later identical requests wait on."""

    def __init__(self):
        self.done = threading.Event()
        self.response: Optional[dns.message.Message] = None
        self.error: Optional[RFC2136Error] = None


def request_key(message: dns.message.Message, address: str) -> Hashable:
    """Identify a request by destination and content, ignoring id and TSIG."""
    sections = tuple(
        rrset.to_text() for section in message.sections for rrset in section
    )
    return (address, message.opcode(), message.flags, sections)


class TransportClient:
    """Synchronous DNS client used by the RFC2136 provider."""

    def __init__(
        self,
        protocol: str = "tcp",
        timeout: float = DEFAULT_TIMEOUT,
        single_inflight: bool = True,
    ):
        if protocol not in PROTOCOLS:
            raise ConfigurationError(
                f"Unknown protocol {protocol!r}, expected one of {PROTOCOLS}"
            )
        self.protocol = protocol
        self.timeout = timeout
        self.single_inflight = single_inflight
        self._inflight: Dict[Hashable, _Call] = {}
        self._inflight_lock = threading.Lock()

    def exchange(
        self,
        message: dns.message.Message,
        address: str,
        timeout: Optional[float] = None,
    ) -> dns.message.Message:
        """
        Send a message and return the reply once it is known to be a success.

        Args:
            message: Query or update message, already signed if required
            address: Normalized ``host:port`` of the nameserver
            timeout: Seconds to wait for the reply; the client default if None

        Returns:
            The reply message

        Raises:
            NetworkFailure: The exchange failed at the transport level
            AuthenticationFailed: TSIG verification failed
            ServerRejected: The reply carries a non-success response code
        """
        timeout = self.timeout if timeout is None else timeout
        if not self.single_inflight:
            return self._exchange(message, address, timeout)

        key = request_key(message, address)
        with self._inflight_lock:
            call = self._inflight.get(key)
            leader = call is None
            if leader:
                call = _Call()
                self._inflight[key] = call

        if not leader:
            logger.debug(f"Sharing reply of identical in-flight request to {address}")
            if not call.done.wait(timeout):
                raise NetworkFailure(f"timed out waiting for reply from {address}")
            if call.error is not None:
                raise copy.copy(call.error)
            if call.response is None:
                raise NetworkFailure(f"no reply from {address}")
            return call.response

        try:
            call.response = self._exchange(message, address, timeout)
            return call.response
        except RFC2136Error as e:
            call.error = e
            raise
        except BaseException as e:
            call.error = NetworkFailure(f"exchange with {address} failed: {e!r}")
            raise
        finally:
            with self._inflight_lock:
                del self._inflight[key]
            call.done.set()

    def _exchange(
        self, message: dns.message.Message, address: str, timeout: float
    ) -> dns.message.Message:
        host, port = split_host_port(address)

        try:
            response = self._send(message, host, port, timeout)
        except _TSIG_ERRORS as e:
            raise AuthenticationFailed(
                f"TSIG verification failed with {address}: {e}"
            ) from e
        except dns.exception.Timeout as e:
            raise NetworkFailure(f"timed out after {timeout}s talking to {address}") from e
        except (dns.exception.DNSException, OSError, ValueError) as e:
            raise NetworkFailure(f"exchange with {address} failed: {e}") from e

        rcode = response.rcode()
        if rcode != dns.rcode.NOERROR:
            error_message = f"DNS request failed with response code: {dns.rcode.to_text(rcode)}"
            logger.error(error_message)
            raise ServerRejected(dns.rcode.to_text(rcode))

        return response

    def _send(
        self, message: dns.message.Message, host: str, port: int, timeout: float
    ) -> dns.message.Message:
        """Put the message on the wire and read the reply."""
        if self.protocol == "udp":
            response, _ = dns.query.udp_with_fallback(
                message, host, timeout=timeout, port=port
            )
            return response
        return dns.query.tcp(message, host, timeout=timeout, port=port)
