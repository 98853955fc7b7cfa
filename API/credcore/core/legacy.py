"""Verification against stored hashes of unknown provenance.

Older deployments hashed with different iteration counts and fed the salt to
PBKDF2 in different ways, and records carry no version tag. Every historical
configuration is therefore tried in a fixed order until one matches.
"""
from __future__ import annotations

from passlib.utils import consteq

from credcore.core import verification_metrics
from credcore.core.encoding import to_utf8
from credcore.core.errors import CredentialError, DerivationFailure
from credcore.core.logging import DOMAIN_CREDENTIALS, get_domain_logger
from credcore.core.password import (
    CANONICAL,
    CANONICAL_ITERATIONS,
    LEGACY_ITERATIONS,
    DerivationConfig,
    PasswordRecord,
    SaltEncoding,
    derive_with,
    generate,
)
from credcore.core.settings import settings

logger = get_domain_logger(__name__, DOMAIN_CREDENTIALS)

LEGACY_A = DerivationConfig("legacy_a", LEGACY_ITERATIONS, SaltEncoding.HEX_STRING)
# Same bytes reach PBKDF2 as for CANONICAL; kept as its own step until
# historical records show it never matched on its own.
LEGACY_B1 = DerivationConfig("legacy_b1", CANONICAL_ITERATIONS, SaltEncoding.RAW_BYTES)
LEGACY_B2 = DerivationConfig("legacy_b2", LEGACY_ITERATIONS, SaltEncoding.RAW_BYTES)

VERIFICATION_ORDER: tuple[DerivationConfig, ...] = (CANONICAL, LEGACY_A, LEGACY_B1, LEGACY_B2)


def _hashes_equal(candidate: str, stored_hash: str) -> bool:
    return consteq(candidate.encode("utf-8"), to_utf8(stored_hash))


def identify(password: str, stored_hash: str, stored_salt: str) -> DerivationConfig | None:
    """Return the first configuration in VERIFICATION_ORDER that reproduces ``stored_hash``.

    A failing attempt (bad salt encoding, primitive error) counts as a
    non-match for that configuration only. If every attempt failed with
    DerivationFailure the primitive itself is broken and the last failure
    is raised.
    """
    if not stored_hash or not stored_salt:
        verification_metrics.record_miss()
        return None
    failures: list[CredentialError] = []
    for config in VERIFICATION_ORDER:
        try:
            candidate = derive_with(password, stored_salt, config)
        except CredentialError as exc:
            logger.warning(
                "Stored-hash check failed | config=%s error=%s code=%s",
                config.name,
                type(exc).__name__,
                exc.code,
            )
            verification_metrics.record_attempt_error(config.name)
            failures.append(exc)
            continue
        if _hashes_equal(candidate, stored_hash):
            if settings.log_verification_attempts:
                logger.info("Stored hash matched | config=%s", config.name)
            verification_metrics.record_match(config.name)
            return config
        if settings.log_verification_attempts:
            logger.debug("Stored hash did not match | config=%s", config.name)

    if len(failures) == len(VERIFICATION_ORDER) and all(isinstance(f, DerivationFailure) for f in failures):
        raise failures[-1]
    verification_metrics.record_miss()
    return None


def verify(password: str, stored_hash: str, stored_salt: str) -> bool:
    return identify(password, stored_hash, stored_salt) is not None


def needs_migration(config: DerivationConfig) -> bool:
    return config != CANONICAL


def verify_and_update(
    password: str, stored_hash: str, stored_salt: str
) -> tuple[bool, PasswordRecord | None]:
    """Verify, and re-hash with the canonical configuration when a legacy one matched.

    Returns ``(matched, new_record)``; ``new_record`` is only set when the
    caller should persist a replacement salt/hash pair.
    """
    config = identify(password, stored_hash, stored_salt)
    if config is None:
        return False, None
    if not needs_migration(config):
        return True, None
    logger.info("Re-hashing credential matched by legacy configuration | config=%s", config.name)
    return True, generate(password)
