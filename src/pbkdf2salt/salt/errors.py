from __future__ import annotations


class SaltedHashError(Exception):
    """Base class for all errors raised by the salted hash codec."""


class ParseError(SaltedHashError, ValueError):
    """A token or encoded field could not be read."""


class MalformedTokenError(ParseError):
    """Wrong field count, bad separator or an invalid iteration count."""


class MalformedEncodingError(ParseError):
    """A salt/key field is not valid adapted-base64 output."""


class UnrecognizedSchemeError(ParseError):
    def __init__(self, tag: str):
        super().__init__(f"Unrecognized hash scheme: {tag!r}")
        self.tag = tag


class RandomSourceError(SaltedHashError, RuntimeError):
    """The random byte source failed; no token is produced."""
