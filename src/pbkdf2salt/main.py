"""CLI 入口"""

import logging
import sys
from typing import Optional

import click

from .config import get_settings
from .salt import Pbkdf2Hasher, tokens
from .salt.errors import ParseError, RandomSourceError


def _log_level(name: str) -> int:
    level = logging.getLevelName((name or "").strip().upper())
    # getLevelName returns a "Level x" string for unknown names.
    return level if isinstance(level, int) else logging.WARNING


def _build_hasher(rounds: Optional[int] = None) -> Pbkdf2Hasher:
    settings = get_settings()
    logging.basicConfig(level=_log_level(settings.log_level), format="%(levelname)s %(name)s: %(message)s")
    hasher = Pbkdf2Hasher.from_settings(settings)
    if rounds is not None:
        hasher.hash_count = rounds
    return hasher


@click.group()
def main():
    """pbkdf2salt - salted PBKDF2-SHA256 password hashes

    示例:
        pbkdf2salt hash
        pbkdf2salt verify '$pbkdf2-sha256$25000$...'
        pbkdf2salt check '$pbkdf2-sha256$25000$...'
    """


@main.command("hash")
@click.option("--password", prompt=True, hide_input=True, confirmation_prompt=True)
@click.option("--salt", "salt", default=None, help="Existing token or encoded salt to reuse")
@click.option("--rounds", "-r", type=int, default=None, help="Iteration count (clamped to the configured band)")
def hash_command(password: str, salt: Optional[str], rounds: Optional[int]):
    """Hash a password and print the token."""
    hasher = _build_hasher(rounds)
    try:
        token = hasher.hash(password, salt)
    except RandomSourceError as e:
        click.echo(f"错误: {e}", err=True)
        sys.exit(2)
    if token is None:
        raise click.UsageError("Empty passwords cannot be hashed")
    click.echo(token)


@main.command("verify")
@click.argument("token")
@click.option("--password", prompt=True, hide_input=True)
def verify_command(token: str, password: str):
    """Exit 0 when the password matches TOKEN, 1 otherwise."""
    hasher = _build_hasher()
    if hasher.verify(password, token):
        click.echo("OK")
        return
    click.echo("MISMATCH", err=True)
    sys.exit(1)


@main.command("check")
@click.argument("token")
def check_command(token: str):
    """Report whether TOKEN is well formed and whether it needs a rehash."""
    hasher = _build_hasher()
    try:
        parsed = tokens.parse(token)
    except ParseError as e:
        click.echo(f"invalid: {e}")
        sys.exit(1)

    click.echo(f"scheme: {parsed.scheme.name}")
    click.echo(f"hash_count: {parsed.hash_count if parsed.hash_count is not None else '-'}")
    click.echo(f"valid: {'yes' if hasher.is_valid_token(token) else 'no'}")
    click.echo(f"needs_rehash: {'yes' if hasher.needs_rehash(token) else 'no'}")


if __name__ == "__main__":
    main()
