"""Opaque bearer tokens (password-reset links, session bootstrap).

Only the SHA-256 digest of a token is stored. Tokens carry 256 bits of
entropy by default, so the digest is unsalted.
"""
from __future__ import annotations

import hashlib
import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from passlib.utils import consteq

from credcore.core.encoding import to_utf8
from credcore.core.logging import DOMAIN_TOKENS, get_domain_logger
from credcore.core.settings import settings

logger = get_domain_logger(__name__, DOMAIN_TOKENS)


def generate_token(length: int | None = None) -> str:
    if length is None:
        length = settings.token_bytes
    if not isinstance(length, int) or isinstance(length, bool) or length < 1:
        raise ValueError("token length must be a positive integer")
    return secrets.token_hex(length)


def hash_token(token: str) -> str:
    return hashlib.sha256(to_utf8(token)).hexdigest()


def token_matches(token: str, stored_digest: str) -> bool:
    if not token or not stored_digest:
        return False
    return consteq(hash_token(token).encode("utf-8"), to_utf8(stored_digest))


def _as_utc(moment: datetime | None) -> datetime:
    if moment is None:
        return datetime.now(timezone.utc)
    # Naive datetimes are taken to be UTC.
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


@dataclass(frozen=True)
class ResetToken:
    token: str
    digest: str
    expires_at: datetime

    def is_expired(self, now: datetime | None = None) -> bool:
        return _as_utc(now) >= _as_utc(self.expires_at)


def issue_reset_token(now: datetime | None = None) -> ResetToken:
    """Create a reset token. Hand ``token`` to the user once; persist ``digest`` and ``expires_at``."""
    issued_at = _as_utc(now)
    token = generate_token()
    reset = ResetToken(
        token=token,
        digest=hash_token(token),
        expires_at=issued_at + timedelta(minutes=settings.reset_token_ttl_minutes),
    )
    logger.info("Issued reset token | digest_prefix=%s expires_at=%s", reset.digest[:8], reset.expires_at.isoformat())
    return reset
