"""In-memory verification metrics: which stored-hash configuration matched, misses, attempt errors."""
from __future__ import annotations

from collections import Counter
from threading import Lock

_lock = Lock()
_matches: Counter[str] = Counter()
_errors: Counter[str] = Counter()
_misses = 0


def record_match(config_name: str) -> None:
    with _lock:
        _matches[config_name] += 1


def record_miss() -> None:
    with _lock:
        global _misses
        _misses += 1


def record_attempt_error(config_name: str) -> None:
    with _lock:
        _errors[config_name] += 1


def get_verification_metrics() -> dict:
    with _lock:
        matches = dict(_matches)
        errors = dict(_errors)
        misses = _misses
    total_matches = sum(matches.values())
    legacy_matches = total_matches - matches.get("canonical", 0)
    legacy_ratio = (legacy_matches / total_matches) if total_matches else None
    return {
        "verify_matches": matches,
        "verify_match_total": total_matches,
        "verify_misses": misses,
        "verify_attempt_errors": errors,
        "legacy_match_ratio": round(legacy_ratio, 4) if legacy_ratio is not None else None,
    }


def reset_verification_metrics() -> None:
    """Reset counters (e.g. for tests)."""
    with _lock:
        global _misses
        _matches.clear()
        _errors.clear()
        _misses = 0
