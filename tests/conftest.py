from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
API_DIR = ROOT / "API"
if str(API_DIR) not in sys.path:
    sys.path.insert(0, str(API_DIR))

# Test-mode settings:
# - small derivation cap so offload tests exercise queuing
# - per-attempt verification logging on
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("MAX_CONCURRENT_DERIVATIONS", "2")
os.environ.setdefault("LOG_VERIFICATION_ATTEMPTS", "true")

from credcore.core.verification_metrics import reset_verification_metrics  # noqa: E402


@pytest.fixture(autouse=True)
def _clean_verification_metrics():
    reset_verification_metrics()
    yield
    reset_verification_metrics()


@pytest.fixture(scope="session")
def legacy_salt() -> str:
    return "aa" * 32
