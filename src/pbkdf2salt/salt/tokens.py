"""Text form of a PBKDF2 hash.

Three shapes are read and written:

    $<tag>$<count>$<salt64>$<key64>   full hash
    $<tag>$<count>$<salt64>           setting: salt and count, no key yet
    $<tag>$<salt64>                   salt only; the count comes from policy
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

from . import ab64
from .errors import MalformedTokenError
from .schemes import Scheme, lookup

SEPARATOR = "$"

# Upper bound for the count field: the largest count hashlib.pbkdf2_hmac accepts (C int).
MAX_HASH_COUNT = 2**31 - 1

_COUNT_RE = re.compile(r"[1-9][0-9]*")


@dataclass(frozen=True)
class HashToken:
    scheme: Scheme
    tag: str
    hash_count: Optional[int]
    salt: bytes
    checksum: Optional[bytes] = None

    @property
    def is_full(self) -> bool:
        return self.hash_count is not None and self.checksum is not None

    def to_string(self) -> str:
        return serialize(self.tag, self.hash_count, self.salt, self.checksum)


def serialize(
    tag: str,
    hash_count: Optional[int],
    salt: bytes,
    checksum: Optional[bytes] = None,
) -> str:
    if hash_count is None:
        if checksum is not None:
            raise ValueError("A checksum requires a hash count")
        fields = [tag, ab64.encode(salt)]
    else:
        if int(hash_count) < 1:
            raise ValueError(f"hash_count must be positive, got {hash_count}")
        fields = [tag, str(int(hash_count)), ab64.encode(salt)]
        if checksum is not None:
            fields.append(ab64.encode(checksum))
    return SEPARATOR + SEPARATOR.join(fields)


def parse_hash_count(raw: str) -> int:
    if not _COUNT_RE.fullmatch(raw or ""):
        raise MalformedTokenError(f"Invalid hash count field: {raw!r}")
    count = int(raw)
    if count > MAX_HASH_COUNT:
        raise MalformedTokenError(f"Hash count out of range: {count}")
    return count


def parse(text: str) -> HashToken:
    """Parse any of the three token shapes.

    Raises MalformedTokenError, UnrecognizedSchemeError or
    MalformedEncodingError (all ParseError subclasses).
    """
    if not isinstance(text, str) or not text.startswith(SEPARATOR):
        raise MalformedTokenError("Token must start with '$'")

    fields = text[1:].split(SEPARATOR)
    if len(fields) not in (2, 3, 4) or any(not f for f in fields):
        raise MalformedTokenError(f"Unexpected token layout ({len(fields)} fields)")

    tag = fields[0]
    scheme = lookup(tag)

    if len(fields) == 2:
        return HashToken(scheme=scheme, tag=tag, hash_count=None, salt=ab64.decode(fields[1]))

    hash_count = parse_hash_count(fields[1])
    salt = ab64.decode(fields[2])
    checksum = ab64.decode(fields[3]) if len(fields) == 4 else None
    return HashToken(scheme=scheme, tag=tag, hash_count=hash_count, salt=salt, checksum=checksum)
