"""Exception taxonomy for credcore.

Authentication failure is never an exception: ``verify`` returns ``False``.
Only infrastructure problems and caller mistakes are raised.
"""


class CredentialError(Exception):
    code = "credential_error"

    def __init__(self, message: str, *, code: str | None = None):
        self.message = message
        if code:
            self.code = code
        super().__init__(message)


class DerivationFailure(CredentialError):
    """The PBKDF2 primitive itself failed. Treat as an infrastructure error."""

    code = "derivation_failure"


class SaltDecodeError(CredentialError, ValueError):
    """A stored salt could not be decoded from hex."""

    code = "salt_decode_error"


class PasswordPolicyError(CredentialError, ValueError):
    code = "password_policy"
