"""Password hashing for stored credentials.

Hashes are PBKDF2-HMAC-SHA512, 64-byte keys, stored as lowercase hex next to
a hex salt. Nothing else is persisted: the configuration that produced a
record is worked out again at verification time (see credcore.core.legacy).
"""
from __future__ import annotations

import binascii
import secrets
from dataclasses import asdict, dataclass
from enum import Enum

from passlib.crypto.digest import pbkdf2_hmac

from credcore.core.encoding import to_utf8
from credcore.core.errors import DerivationFailure, SaltDecodeError

DIGEST = "sha512"
KEY_LENGTH = 64
SALT_BYTES = 32
CANONICAL_ITERATIONS = 120_000
LEGACY_ITERATIONS = 100_000


class SaltEncoding(str, Enum):
    # Stored hex string handed to derive(), which decodes it.
    HEX_STRING = "hex_string"
    # Byte buffer rebuilt from the stored hex before derive() sees it.
    RAW_BYTES = "raw_bytes"


@dataclass(frozen=True)
class DerivationConfig:
    name: str
    iterations: int
    salt_encoding: SaltEncoding

    def prepare_salt(self, stored_salt: str) -> bytes | str:
        if self.salt_encoding == SaltEncoding.HEX_STRING:
            return stored_salt
        try:
            return binascii.unhexlify(stored_salt)
        except (ValueError, TypeError) as exc:
            raise SaltDecodeError(f"stored salt is not valid hex ({self.name})") from exc


CANONICAL = DerivationConfig("canonical", CANONICAL_ITERATIONS, SaltEncoding.HEX_STRING)


@dataclass(frozen=True)
class PasswordRecord:
    salt: str
    hash: str

    def as_dict(self) -> dict[str, str]:
        return asdict(self)


def _decode_salt(salt: str) -> bytes:
    try:
        return bytes.fromhex(salt)
    except ValueError as exc:
        raise SaltDecodeError("stored salt is not valid hex") from exc


def derive(password: str, salt: bytes | str, iterations: int = CANONICAL_ITERATIONS) -> str:
    """Derive the hex-encoded PBKDF2-SHA512 key for ``password``.

    ``salt`` may be raw bytes or the hex string kept at rest. Identical
    inputs always give identical output. Lone surrogates in ``password``
    are hashed as U+FFFD.
    """
    if isinstance(salt, str):
        salt = _decode_salt(salt)
    secret = to_utf8(password) if isinstance(password, str) else password
    try:
        key = pbkdf2_hmac(DIGEST, secret, salt, iterations, KEY_LENGTH)
    except Exception as exc:
        raise DerivationFailure(f"pbkdf2_hmac({DIGEST}) failed: {type(exc).__name__}: {exc}") from exc
    return key.hex()


def derive_with(password: str, stored_salt: str, config: DerivationConfig) -> str:
    return derive(password, config.prepare_salt(stored_salt), config.iterations)


def generate(password: str) -> PasswordRecord:
    """Hash a new or changed password with a fresh salt and the canonical configuration."""
    salt = secrets.token_bytes(SALT_BYTES)
    return PasswordRecord(salt=salt.hex(), hash=derive(password, salt, CANONICAL.iterations))
