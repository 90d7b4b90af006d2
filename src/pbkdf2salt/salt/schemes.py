from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple

from .errors import UnrecognizedSchemeError


@dataclass(frozen=True)
class Scheme:
    """One PBKDF2 variant and every tag spelling that names it.

    `tags[0]` is the spelling written into new tokens.
    """

    name: str
    digest: str
    key_length: int
    tags: Tuple[str, ...]

    @property
    def tag(self) -> str:
        return self.tags[0]


PBKDF2_SHA256 = Scheme(
    name="pbkdf2_sha256",
    digest="sha256",
    key_length=32,
    tags=("pbkdf2-sha256", "pbkdf2_sha256"),
)

# Read-only: accepted for verification, never produced.
PBKDF2_SHA1 = Scheme(name="pbkdf2_sha1", digest="sha1", key_length=20, tags=("pbkdf2",))
PBKDF2_SHA512 = Scheme(
    name="pbkdf2_sha512",
    digest="sha512",
    key_length=64,
    tags=("pbkdf2-sha512", "pbkdf2_sha512"),
)

CANONICAL_SCHEME = PBKDF2_SHA256

_BY_TAG: Dict[str, Scheme] = {
    tag: scheme for scheme in (PBKDF2_SHA256, PBKDF2_SHA1, PBKDF2_SHA512) for tag in scheme.tags
}


def known_tags() -> Tuple[str, ...]:
    return tuple(_BY_TAG)


def lookup(tag: str) -> Scheme:
    scheme = _BY_TAG.get(tag)
    if scheme is None:
        raise UnrecognizedSchemeError(tag)
    return scheme
