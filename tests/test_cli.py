import pytest
from click.testing import CliRunner

PASSLIB_TOKEN = "$pbkdf2-sha256$6400$.6UI/S.nXIk8jcbdHx3Fhg$98jZicV16ODfEsEZeYPGHU3kbrUrvUEXOPimVSQDD44"


@pytest.fixture()
def runner(monkeypatch):
    monkeypatch.setenv("PBKDF2_HASH_COUNT", "1000")
    monkeypatch.setenv("PBKDF2_MIN_HASH_COUNT", "1000")
    monkeypatch.setenv("PBKDF2_MAX_HASH_COUNT", "50000")

    from pbkdf2salt.config.settings import get_settings

    get_settings.cache_clear()
    yield CliRunner()
    get_settings.cache_clear()


def test_settings_from_env(runner):
    from pbkdf2salt.config.settings import get_settings
    from pbkdf2salt.salt.pbkdf2 import Pbkdf2Hasher

    hasher = Pbkdf2Hasher.from_settings()
    assert get_settings().pbkdf2_hash_count == 1000
    assert hasher.policy.maximum == 50000
    assert hasher.salt_length == 16


def test_salt_length_from_env(runner, monkeypatch):
    monkeypatch.setenv("PBKDF2_SALT_LENGTH", "24")

    from pbkdf2salt.config.settings import get_settings
    from pbkdf2salt.salt import tokens
    from pbkdf2salt.salt.pbkdf2 import Pbkdf2Hasher

    get_settings.cache_clear()
    hasher = Pbkdf2Hasher.from_settings()
    assert len(tokens.parse(hasher.hash("password")).salt) == 24


def test_cli_hash_then_verify(runner):
    from pbkdf2salt.main import main

    r = runner.invoke(main, ["hash", "--password", "s3cret"])
    assert r.exit_code == 0, r.output
    token = r.output.strip()
    assert token.startswith("$pbkdf2-sha256$1000$")

    r = runner.invoke(main, ["verify", token, "--password", "s3cret"])
    assert r.exit_code == 0, r.output
    assert "OK" in r.output

    r = runner.invoke(main, ["verify", token, "--password", "wrong"])
    assert r.exit_code == 1


def test_cli_hash_prompts_for_password(runner):
    from pbkdf2salt.main import main

    r = runner.invoke(main, ["hash", "--salt", PASSLIB_TOKEN], input="password\npassword\n")
    assert r.exit_code == 0, r.output
    assert r.output.strip().splitlines()[-1] == PASSLIB_TOKEN


def test_cli_hash_rounds_are_clamped(runner):
    from pbkdf2salt.main import main

    r = runner.invoke(main, ["hash", "--password", "s3cret", "--rounds", "10"])
    assert r.exit_code == 0, r.output
    assert r.output.strip().startswith("$pbkdf2-sha256$1000$")


def test_cli_check(runner):
    from pbkdf2salt.main import main

    r = runner.invoke(main, ["check", PASSLIB_TOKEN])
    assert r.exit_code == 0, r.output
    assert "hash_count: 6400" in r.output
    assert "valid: yes" in r.output
    assert "needs_rehash: no" in r.output

    r = runner.invoke(main, ["check", "$nope$1$abcd"])
    assert r.exit_code == 1
    assert "invalid" in r.output


@pytest.mark.parametrize("level", ["verbose", "", "debug"])
def test_cli_tolerates_any_log_level(runner, monkeypatch, level):
    monkeypatch.setenv("LOG_LEVEL", level)

    from pbkdf2salt.config.settings import get_settings
    from pbkdf2salt.main import main

    get_settings.cache_clear()
    r = runner.invoke(main, ["check", PASSLIB_TOKEN])
    assert r.exit_code == 0, r.output
    assert "valid: yes" in r.output
