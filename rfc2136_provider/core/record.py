"""
Record model shared by every provider.

A Record is the protocol-agnostic description of a DNS resource record: an
owner name, a type mnemonic, the value in its textual presentation and a TTL
in seconds.
"""

from dataclasses import dataclass
from datetime import timedelta
from enum import Enum
from typing import Dict, Union


class UpdateMode(Enum):
    """How an update transaction treats the existing RRset."""

    APPEND = "append"
    DELETE = "delete"
    SET = "set"


@dataclass(frozen=True)
class Record:
    name: str
    type: str
    value: str
    ttl: Union[int, timedelta] = 300

    @property
    def ttl_seconds(self) -> int:
        if isinstance(self.ttl, timedelta):
            return int(self.ttl.total_seconds())
        return int(self.ttl)

    @classmethod
    def from_dict(cls, data: Dict) -> "Record":
        """Build a record from a CSV row or dry-run output mapping."""
        ttl = data.get("ttl")
        return cls(
            name=str(data["name"]).strip(),
            type=str(data["type"]).strip().upper(),
            value=str(data["value"]).strip(),
            ttl=300 if ttl is None or ttl == "" else int(ttl),
        )

    def to_dict(self) -> Dict:
        """Plain mapping with the TTL in seconds, as written to dry-run output."""
        return {
            "name": self.name,
            "type": self.type,
            "value": self.value,
            "ttl": self.ttl_seconds,
        }
