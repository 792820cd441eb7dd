r"""Value objects for AT Protocol coordinates.

An AT-URI addresses a record in a user's repository:

    at://did:plc:lehcqqkwzcwvjvw66uthu5oq/app.annos.annotation/3lnxh4zet5c2a
         \_____________ repo _____________/\____ collection ___/\__ rkey __/
"""

from __future__ import annotations

import random
import re
import time
from typing import ClassVar

from pydantic import field_validator

from annos.domain.shared.model.value import RootValueObject, ValueObject

_last_micros = 0


class DID(RootValueObject[str]):
    """Decentralized identifier, e.g. ``did:plc:abc123`` or ``did:web:example.com``."""

    _re: ClassVar[re.Pattern] = re.compile(r"^did:[a-z]+:[a-zA-Z0-9._:%\-]*[a-zA-Z0-9._\-]$")

    @field_validator("root")
    @classmethod
    def _validate(cls, v: str) -> str:
        v = v.strip()
        if not cls._re.match(v):
            raise ValueError(f"invalid DID: {v!r}")
        return v


class ATUri(ValueObject):
    """Parsed ``at://`` URI with repo, collection and record key parts."""

    AUTHORITY: ClassVar[str] = r"(?:did:[a-z]+:[a-zA-Z0-9._:%\-]+|[a-zA-Z0-9.\-]+)"
    COLLECTION: ClassVar[str] = r"[a-zA-Z][a-zA-Z0-9\-]*(?:\.[a-zA-Z0-9\-]+)+"
    RKEY: ClassVar[str] = r"[a-zA-Z0-9._:~\-]{1,512}"

    _re: ClassVar[re.Pattern] = re.compile(
        rf"^at://(?P<authority>{AUTHORITY})/(?P<collection>{COLLECTION})/(?P<rkey>{RKEY})$"
    )

    authority: str
    collection: str
    rkey: str

    @classmethod
    def matches(cls, value: str) -> bool:
        return cls._re.match(value) is not None

    @classmethod
    def parse(cls, value: str) -> ATUri:
        m = cls._re.match(value.strip())
        if m is None:
            raise ValueError(f"Invalid AT URI format: {value}")
        return cls(
            authority=m.group("authority"),
            collection=m.group("collection"),
            rkey=m.group("rkey"),
        )

    @classmethod
    def for_record(cls, repo: DID, collection: str, rkey: str) -> ATUri:
        return cls.parse(f"at://{repo}/{collection}/{rkey}")

    @property
    def did(self) -> DID:
        """Repository DID. Handle-based authorities cannot be resolved locally."""
        return DID(self.authority)

    def __str__(self) -> str:
        return f"at://{self.authority}/{self.collection}/{self.rkey}"


class StrongRef(ValueObject):
    """``com.atproto.repo.strongRef``: a record pinned to one content hash."""

    uri: str
    cid: str

    @property
    def at_uri(self) -> ATUri:
        return ATUri.parse(self.uri)

    def to_record(self) -> dict[str, str]:
        return {"uri": self.uri, "cid": self.cid}


class TID(RootValueObject[str]):
    """Timestamp identifier used as record key.

    13 characters of sortable base32: 53 bits of microseconds since the epoch
    followed by a 10 bit clock id.
    """

    ALPHABET: ClassVar[str] = "234567abcdefghijklmnopqrstuvwxyz"
    _re: ClassVar[re.Pattern] = re.compile(r"^[234567abcdefghij][234567abcdefghijklmnopqrstuvwxyz]{12}$")

    @field_validator("root")
    @classmethod
    def _validate(cls, v: str) -> str:
        if not cls._re.match(v):
            raise ValueError(f"invalid TID: {v!r}")
        return v

    @classmethod
    def next(cls, clock_id: int | None = None) -> TID:
        micros = time.time_ns() // 1000
        # strictly increasing within the process
        global _last_micros
        if micros <= _last_micros:
            micros = _last_micros + 1
        _last_micros = micros
        if clock_id is None:
            clock_id = random.randrange(1024)
        return cls(cls._encode((micros << 10) | (clock_id & 0x3FF)))

    @classmethod
    def _encode(cls, n: int) -> str:
        chars = []
        for _ in range(13):
            chars.append(cls.ALPHABET[n & 0x1F])
            n >>= 5
        return "".join(reversed(chars))
