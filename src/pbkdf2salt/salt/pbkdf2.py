from __future__ import annotations

import hashlib
import hmac
import logging
import secrets
from dataclasses import dataclass
from typing import Callable, Literal, Optional, Union

from ..config import Settings, get_settings
from . import ab64, tokens
from .errors import ParseError, RandomSourceError
from .policy import HashCountPolicy
from .schemes import CANONICAL_SCHEME, Scheme

logger = logging.getLogger(__name__)

DEFAULT_SALT_LENGTH = 16

Password = Union[str, bytes, bytearray]
RandomBytes = Callable[[int], bytes]


@dataclass(frozen=True)
class SaltChoice:
    """Which salt/count `hash` will use and where it came from."""

    kind: Literal["fresh", "reused"]
    salt: bytes
    hash_count: int


def _password_bytes(password: Optional[Password]) -> bytes:
    if password is None:
        return b""
    if isinstance(password, (bytes, bytearray)):
        return bytes(password)
    if not isinstance(password, str):
        password = str(password)
    return password.encode("utf-8")


class Pbkdf2Hasher:
    """Salted PBKDF2-HMAC-SHA256 hashing.

    Stored format: $pbkdf2-sha256$<count>$<salt_ab64>$<key_ab64>

    Tokens are compatible with passlib's ``pbkdf2_sha256``; the passlib
    sha1/sha512 variants are accepted for verification.
    """

    def __init__(
        self,
        policy: Optional[HashCountPolicy] = None,
        *,
        salt_length: int = DEFAULT_SALT_LENGTH,
        random_bytes: RandomBytes = secrets.token_bytes,
    ):
        if int(salt_length) < 1:
            raise ValueError(f"salt_length must be positive, got {salt_length}")
        self.policy = policy if policy is not None else HashCountPolicy()
        self.salt_length = int(salt_length)
        self._random_bytes = random_bytes

    @classmethod
    def from_settings(
        cls,
        settings: Optional[Settings] = None,
        *,
        random_bytes: RandomBytes = secrets.token_bytes,
    ) -> "Pbkdf2Hasher":
        settings = settings or get_settings()
        return cls(
            HashCountPolicy.from_settings(settings),
            salt_length=settings.pbkdf2_salt_length,
            random_bytes=random_bytes,
        )

    @property
    def key_length(self) -> int:
        return CANONICAL_SCHEME.key_length

    @property
    def hash_count(self) -> int:
        return self.policy.default

    @hash_count.setter
    def hash_count(self, value: Optional[int]) -> None:
        self.policy.default = value

    # Salt handling

    def generate_salt(self) -> bytes:
        try:
            raw = self._random_bytes(self.salt_length)
        except Exception as e:
            raise RandomSourceError("Random byte source failed") from e
        if not isinstance(raw, (bytes, bytearray)) or len(raw) != self.salt_length:
            raise RandomSourceError(f"Random byte source returned an unexpected value for {self.salt_length} bytes")
        return bytes(raw)

    def encode_salt(self, raw: bytes) -> str:
        return ab64.encode(raw)

    def is_valid_salt(self, value: str) -> bool:
        """True if `value` can be handed to `hash` as a custom salt.

        Accepts a bare encoded salt or any token shape carrying a salt of
        the configured length.
        """
        if not value or not isinstance(value, str):
            return False
        try:
            if value.startswith(tokens.SEPARATOR):
                salt = tokens.parse(value).salt
            else:
                salt = ab64.decode(value)
        except ParseError:
            return False
        return len(salt) == self.salt_length

    def select_salt(self, existing: Optional[str] = None) -> SaltChoice:
        """Pick the salt and count for a new hash.

        A usable `existing` token (or bare encoded salt) is reused. Anything
        that cannot be read falls back to a fresh salt with a warning rather
        than an error.
        """
        if existing:
            reason = ""
            if not isinstance(existing, str):
                reason = f"unsupported type {type(existing).__name__}"
            elif existing.startswith(tokens.SEPARATOR):
                try:
                    parsed = tokens.parse(existing)
                except ParseError as e:
                    reason = f"{type(e).__name__}: {e}"
                else:
                    count = parsed.hash_count if parsed.hash_count is not None else self.policy.resolve()
                    return SaltChoice(kind="reused", salt=parsed.salt, hash_count=count)
            else:
                try:
                    raw = ab64.decode(existing)
                except ParseError as e:
                    reason = f"{type(e).__name__}: {e}"
                else:
                    if len(raw) == self.salt_length:
                        return SaltChoice(kind="reused", salt=raw, hash_count=self.policy.resolve())
                    reason = f"salt is {len(raw)} bytes, expected {self.salt_length}"
            logger.warning("Ignoring unusable salt hint (%s); generating a fresh salt.", reason)

        return SaltChoice(kind="fresh", salt=self.generate_salt(), hash_count=self.policy.resolve())

    # Hashing

    def _derive(self, scheme: Scheme, password: bytes, salt: bytes, hash_count: int) -> bytes:
        logger.debug("Deriving %s key (count=%s, salt_len=%s)", scheme.name, hash_count, len(salt))
        return hashlib.pbkdf2_hmac(scheme.digest, password, salt, int(hash_count), dklen=scheme.key_length)

    def hash(self, password: Optional[Password], existing: Optional[str] = None) -> Optional[str]:
        """Hash `password`, reusing the salt of `existing` when it is usable.

        Returns None for an empty password; nothing is derived in that case.
        """
        pw = _password_bytes(password)
        if not pw:
            return None

        choice = self.select_salt(existing)
        checksum = self._derive(CANONICAL_SCHEME, pw, choice.salt, choice.hash_count)
        return tokens.serialize(CANONICAL_SCHEME.tag, choice.hash_count, choice.salt, checksum)

    def verify(self, password: Optional[Password], token: str) -> bool:
        """Verify password against a stored token."""

        pw = _password_bytes(password)
        if not pw:
            return False
        try:
            parsed = tokens.parse(token)
        except ParseError:
            return False
        if not parsed.is_full or len(parsed.checksum) != parsed.scheme.key_length:
            return False

        got = self._derive(parsed.scheme, pw, parsed.salt, parsed.hash_count)
        return hmac.compare_digest(got, parsed.checksum)

    def is_valid_token(self, token: str) -> bool:
        try:
            parsed = tokens.parse(token)
        except ParseError:
            return False
        return (
            parsed.is_full
            and len(parsed.salt) == self.salt_length
            and len(parsed.checksum) == parsed.scheme.key_length
        )

    def needs_rehash(self, token: str) -> bool:
        """True if the token's count is outside the current policy band.

        Unreadable tokens never request a rehash.
        """
        try:
            parsed = tokens.parse(token)
        except ParseError:
            return False
        if parsed.hash_count is None:
            return False
        return self.policy.needs_rehash(parsed.hash_count)
