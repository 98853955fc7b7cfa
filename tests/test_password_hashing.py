import re

import pytest

from credcore.core.errors import DerivationFailure, SaltDecodeError
from credcore.core.password import (
    CANONICAL,
    CANONICAL_ITERATIONS,
    KEY_LENGTH,
    SALT_BYTES,
    SaltEncoding,
    derive,
    derive_with,
    generate,
)

HEX_RE = re.compile(r"^[0-9a-f]+$")


def test_generate_returns_hex_salt_and_hash():
    record = generate("Tr0ub4dor&3")
    assert len(record.salt) == SALT_BYTES * 2
    assert len(record.hash) == KEY_LENGTH * 2
    assert HEX_RE.match(record.salt)
    assert HEX_RE.match(record.hash)
    assert record.as_dict() == {"salt": record.salt, "hash": record.hash}


def test_generate_uses_fresh_salt_each_time():
    first = generate("same-password")
    second = generate("same-password")
    assert first.salt != second.salt
    assert first.hash != second.hash


def test_generate_matches_canonical_derivation():
    record = generate("correct horse")
    assert derive("correct horse", bytes.fromhex(record.salt), CANONICAL_ITERATIONS) == record.hash
    assert derive_with("correct horse", record.salt, CANONICAL) == record.hash


def test_derive_is_deterministic():
    salt = bytes(range(32))
    assert derive("p@ss", salt, 1000) == derive("p@ss", salt, 1000)


def test_derive_accepts_hex_string_or_bytes_salt():
    salt_hex = "0f" * 32
    assert derive("p@ss", salt_hex, 1000) == derive("p@ss", bytes.fromhex(salt_hex), 1000)


def test_derive_accepts_short_legacy_salt():
    assert len(derive("p@ss", b"\x01", 1000)) == KEY_LENGTH * 2


def test_derive_known_vector_matches_hashlib():
    import hashlib

    expected = hashlib.pbkdf2_hmac("sha512", "pässwörd".encode("utf-8"), b"salt", 2000, 64).hex()
    assert derive("pässwörd", b"salt", 2000) == expected


def test_iteration_count_changes_output():
    salt = b"s" * 32
    assert derive("pw", salt, 1000) != derive("pw", salt, 1001)


def test_derive_rejects_non_hex_salt_string():
    with pytest.raises(SaltDecodeError):
        derive("pw", "not-hex", 1000)


def test_primitive_failure_raises_derivation_failure():
    with pytest.raises(DerivationFailure) as exc_info:
        derive("pw", b"salt", 0)
    assert exc_info.value.code == "derivation_failure"


def test_canonical_configuration_is_fixed():
    assert CANONICAL.name == "canonical"
    assert CANONICAL.iterations == 120_000
    assert CANONICAL.salt_encoding == SaltEncoding.HEX_STRING


@pytest.mark.parametrize(
    ("password", "salt"),
    [
        ("\ud800", b"\x01" * 32),
        ("abc\udfffdef", b"\x01" * 32),
        ("", b"\x01" * 32),
        ("\x00", b"\x00"),
        ("pässwörd 😀", b"\xff" * 100),
        ("pw", "AA" * 32),
        ("pw", "00"),
    ],
    ids=["lone-high-surrogate", "lone-low-surrogate", "empty", "nul", "non-ascii", "upper-hex-salt", "one-byte-salt"],
)
def test_derive_never_raises_on_well_typed_input(password, salt):
    assert len(derive(password, salt, 1)) == KEY_LENGTH * 2


def test_lone_surrogates_hash_as_replacement_character():
    salt = b"\x02" * 32
    assert derive("\ud800", salt, 1000) == derive("\ufffd", salt, 1000)
    assert derive("a\udc00b", salt, 1000) == derive("a\ufffdb", salt, 1000)


def test_split_surrogate_pair_hashes_as_the_joined_character():
    salt = b"\x03" * 32
    assert derive("\ud83d\ude00", salt, 1000) == derive("\U0001f600", salt, 1000)
