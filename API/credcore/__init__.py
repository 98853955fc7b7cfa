"""credcore: password hashing, legacy-aware verification and bearer token helpers."""
from credcore.core.errors import CredentialError, DerivationFailure, PasswordPolicyError, SaltDecodeError
from credcore.core.legacy import VERIFICATION_ORDER, identify, needs_migration, verify, verify_and_update
from credcore.core.offload import derive_async, generate_async, verify_and_update_async, verify_async
from credcore.core.password import CANONICAL, DerivationConfig, PasswordRecord, SaltEncoding, derive, generate
from credcore.core.policy import validate_new_password
from credcore.core.tokens import ResetToken, generate_token, hash_token, issue_reset_token, token_matches

__all__ = [
    "CANONICAL",
    "VERIFICATION_ORDER",
    "CredentialError",
    "DerivationConfig",
    "DerivationFailure",
    "PasswordPolicyError",
    "PasswordRecord",
    "ResetToken",
    "SaltDecodeError",
    "SaltEncoding",
    "derive",
    "derive_async",
    "generate",
    "generate_async",
    "generate_token",
    "hash_token",
    "identify",
    "issue_reset_token",
    "needs_migration",
    "token_matches",
    "validate_new_password",
    "verify",
    "verify_and_update",
    "verify_and_update_async",
    "verify_async",
]
