"""Salted PBKDF2 password hashes compatible with passlib tokens."""

__version__ = "0.1.0"
