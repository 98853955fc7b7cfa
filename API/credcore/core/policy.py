from credcore.core.errors import PasswordPolicyError
from credcore.core.settings import settings


def validate_new_password(password: str, confirm: str | None = None) -> None:
    """Reject a new password before it is hashed. Login never goes through here."""
    if not password:
        raise PasswordPolicyError("Password is required", code="password_required")
    if len(password) < settings.min_password_length:
        raise PasswordPolicyError(
            f"Password must be at least {settings.min_password_length} characters",
            code="password_too_short",
        )
    if confirm is not None and password != confirm:
        raise PasswordPolicyError("Passwords do not match", code="password_mismatch")
