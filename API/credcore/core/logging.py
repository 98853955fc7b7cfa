import logging
import re
import sys

from credcore.core.settings import settings

# Domain names for structured logging (credential hashing/verification, bearer tokens).
DOMAIN_CREDENTIALS = "credentials"
DOMAIN_TOKENS = "tokens"


def get_domain_logger(name: str, domain: str) -> logging.LoggerAdapter[logging.Logger]:
    """Return a logger that adds the given domain to every log record (for filtering by domain)."""
    base = logging.getLogger(name)
    return logging.LoggerAdapter(base, {"domain": domain})


class DomainDefaultFilter(logging.Filter):
    """Ensure record has a 'domain' attribute so format string %(domain)s never fails."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "domain"):
            record.domain = "credcore"  # type: ignore[attr-defined]
        return True


_SECRET_PATTERNS = [
    re.compile(r"(?i)(password\s*[=:]\s*)([^\s,;]+)"),
    re.compile(r"(?i)(token\s*[=:]\s*)([^\s,;]+)"),
    re.compile(r"(?i)(salt\s*[=:]\s*)([^\s,;]+)"),
    re.compile(r"(?i)(hash\s*[=:]\s*)([^\s,;]+)"),
    re.compile(r"(?i)(authorization\s*[=:]\s*bearer\s+)([^\s,;]+)"),
]


def redact_secrets(message: str) -> str:
    text = str(message or "")
    for pattern in _SECRET_PATTERNS:
        text = pattern.sub(r"\1[REDACTED]", text)
    return text


class SecretRedactionFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.msg = redact_secrets(record.getMessage())
        record.args = ()
        return True


LOG_FORMAT = "%(asctime)s | %(levelname)s | [%(domain)s] | %(name)s | %(message)s"


def configure_logging(level: str | None = None) -> logging.Handler:
    """Attach a stdout handler with domain and redaction filters to the root logger.

    ``level`` defaults to ``settings.log_level``. Returns the handler so hosts
    (and tests) can detach it.
    """
    level = level or settings.log_level
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.addFilter(DomainDefaultFilter())
    handler.addFilter(SecretRedactionFilter())
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    root.addHandler(handler)
    # passlib logs backend selection at debug; keep it out of service logs.
    logging.getLogger("passlib").setLevel(logging.WARNING)
    return handler
