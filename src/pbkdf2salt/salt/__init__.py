"""Salted PBKDF2 password hashing."""

from .errors import (
    MalformedEncodingError,
    MalformedTokenError,
    ParseError,
    RandomSourceError,
    SaltedHashError,
    UnrecognizedSchemeError,
)
from .pbkdf2 import Pbkdf2Hasher, SaltChoice
from .policy import HashCountBounds, HashCountPolicy
from .schemes import CANONICAL_SCHEME, Scheme
from .tokens import HashToken, parse, serialize

__all__ = [
    "CANONICAL_SCHEME",
    "HashCountBounds",
    "HashCountPolicy",
    "HashToken",
    "MalformedEncodingError",
    "MalformedTokenError",
    "ParseError",
    "Pbkdf2Hasher",
    "RandomSourceError",
    "SaltChoice",
    "SaltedHashError",
    "Scheme",
    "UnrecognizedSchemeError",
    "parse",
    "serialize",
]
