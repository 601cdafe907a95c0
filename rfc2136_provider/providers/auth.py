"""
TSIG authentication for outgoing messages.

This module builds the TSIG keyring from provider configuration and signs
every message handed to it. dnspython computes the signature, with the
current time as timestamp, when the message is rendered for sending, and
verifies the signature of the reply against the same key.
"""

import binascii
import logging
import re
from typing import Dict, Optional, Tuple

import dns.exception
import dns.message
import dns.name
import dns.tsig
import dns.tsigkeyring

from ..exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_ALGORITHM = "hmac-sha256"
FUDGE = 300

SUPPORTED_ALGORITHMS = (
    dns.tsig.HMAC_MD5,
    dns.tsig.HMAC_SHA1,
    dns.tsig.HMAC_SHA224,
    dns.tsig.HMAC_SHA256,
    dns.tsig.HMAC_SHA384,
    dns.tsig.HMAC_SHA512,
)

_ALIASES = {dns.name.from_text("hmac-md5"): dns.tsig.HMAC_MD5}


def normalize_algorithm(algorithm: str) -> dns.name.Name:
    """Return the absolute algorithm name, rejecting unknown algorithms."""
    try:
        name = dns.name.from_text(algorithm or DEFAULT_ALGORITHM)
    except dns.exception.DNSException as e:
        raise ConfigurationError(f"Invalid TSIG algorithm {algorithm!r}: {e}") from e

    name = _ALIASES.get(name, name)
    if name not in SUPPORTED_ALGORITHMS:
        raise ConfigurationError(f"Unsupported TSIG algorithm {algorithm!r}")
    return name


class TSIGAuthenticator:
    """Signs messages with one static TSIG key."""

    def __init__(self, key_name: str, secret: str, algorithm: str = DEFAULT_ALGORITHM):
        try:
            self.key_name = dns.name.from_text(key_name)
        except dns.exception.DNSException as e:
            raise ConfigurationError(f"Invalid TSIG key name {key_name!r}: {e}") from e

        self.algorithm = normalize_algorithm(algorithm)
        self.fudge = FUDGE

        try:
            self.keyring = dns.tsigkeyring.from_text(
                {self.key_name.to_text(): (self.algorithm.to_text(), secret)}
            )
        except (binascii.Error, ValueError) as e:
            raise ConfigurationError(
                f"TSIG secret for {key_name} is not valid base64: {e}"
            ) from e

    def attach(self, message: dns.message.Message) -> dns.message.Message:
        """Sign the message with the configured key."""
        message.use_tsig(
            self.keyring,
            keyname=self.key_name,
            fudge=self.fudge,
            algorithm=self.algorithm,
        )
        return message

    @classmethod
    def from_config(cls, config: Dict) -> Optional["TSIGAuthenticator"]:
        """
        Build an authenticator from provider configuration.

        The secret comes from ``tsig_secret`` or, failing that, from the BIND
        key file named by ``tsig_key_file``. Authentication is active only
        when both the key name and the secret are non-empty.

        Args:
            config: Provider configuration

        Returns:
            The authenticator, or None when TSIG is not configured
        """
        key_name = config.get("tsig_keyname") or ""
        secret = config.get("tsig_secret") or ""
        algorithm = config.get("tsig_algorithm") or ""

        key_file = config.get("tsig_key_file")
        if key_name and not secret and key_file:
            file_algorithm, secret = load_bind_key_file(key_file, key_name)
            algorithm = algorithm or file_algorithm or ""
            logger.info(f"TSIG key loaded from {key_file}")

        if not key_name or not secret:
            logger.debug("TSIG authentication is not configured")
            return None

        return cls(key_name, secret, algorithm or DEFAULT_ALGORITHM)


def load_bind_key_file(path: str, key_name: str) -> Tuple[Optional[str], str]:
    """
    Read the algorithm and secret of a key from a BIND key file.

    Args:
        path: Path to a file holding ``key "name" { ... };`` blocks
        key_name: Name of the key to read

    Returns:
        Tuple of (algorithm or None, secret)

    Raises:
        ConfigurationError: The file cannot be read or has no such key
    """
    try:
        with open(path, "r") as f:
            key_content = f.read()
    except OSError as e:
        raise ConfigurationError(f"Cannot read TSIG key file {path}: {e}") from e

    # Key names in the file may or may not carry the trailing dot
    bare_name = key_name.rstrip(".")
    key_pattern = rf'key\s+"{re.escape(bare_name)}\.?"\s*{{(.*?)}}'
    match = re.search(key_pattern, key_content, re.DOTALL)
    if not match:
        raise ConfigurationError(f"Key '{key_name}' not found in {path}")

    key_block = match.group(1)
    secret_match = re.search(r'secret\s+"([^"]+)"', key_block)
    if not secret_match:
        raise ConfigurationError(f"Key '{key_name}' in {path} has no secret")

    algorithm_match = re.search(r"algorithm\s+\"?([A-Za-z0-9.-]+)\"?\s*;", key_block)
    algorithm = algorithm_match.group(1) if algorithm_match else None
    return algorithm, secret_match.group(1)
