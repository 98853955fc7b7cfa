"""Run PBKDF2 work off the event loop with a process-wide concurrency cap.

Each derivation burns tens of milliseconds of CPU. Derivations run on a
dedicated thread pool sized to the cap, so queued work waits in the pool's
queue without holding threads of the loop's default executor. Cancelling the
awaiting task leaves a derivation that already started to finish.
"""
from __future__ import annotations

import asyncio
from concurrent.futures import ThreadPoolExecutor
from threading import Lock
from typing import Callable, TypeVar

from credcore.core import legacy, password
from credcore.core.settings import settings

T = TypeVar("T")

_executor_lock = Lock()
_limit = max(1, settings.max_concurrent_derivations)
_executor = ThreadPoolExecutor(max_workers=_limit, thread_name_prefix="credcore-derive")


def set_derivation_limit(limit: int) -> None:
    if limit < 1:
        raise ValueError("derivation limit must be at least 1")
    global _executor, _limit
    with _executor_lock:
        previous = _executor
        _executor = ThreadPoolExecutor(max_workers=limit, thread_name_prefix="credcore-derive")
        _limit = limit
    # Work already queued on the old pool still runs.
    previous.shutdown(wait=False)


def get_derivation_limit() -> int:
    return _limit


async def _offload(func: Callable[..., T], *args) -> T:
    with _executor_lock:
        executor = _executor
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(executor, func, *args)


async def derive_async(pw: str, salt: bytes | str, iterations: int = password.CANONICAL_ITERATIONS) -> str:
    return await _offload(password.derive, pw, salt, iterations)


async def generate_async(pw: str) -> password.PasswordRecord:
    return await _offload(password.generate, pw)


async def verify_async(pw: str, stored_hash: str, stored_salt: str) -> bool:
    return await _offload(legacy.verify, pw, stored_hash, stored_salt)


async def verify_and_update_async(
    pw: str, stored_hash: str, stored_salt: str
) -> tuple[bool, password.PasswordRecord | None]:
    return await _offload(legacy.verify_and_update, pw, stored_hash, stored_salt)
