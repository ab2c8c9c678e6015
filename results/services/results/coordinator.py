"""
Cache coordinator for compiled student results.

Each student id owns a small state record: a lock, a generation counter and the
future of the computation currently in flight. The registry lock only guards
lookup/creation of those records; the data fetch never runs under any lock.
Computations run on a coordinator-owned thread pool, so a caller that stops
waiting does not stop the computation: it finishes and populates the cache for
the next request. `invalidate` bumps the generation, which prevents an older
in-flight computation from writing its result back.
"""

from __future__ import annotations

import logging
import threading
import time
from concurrent.futures import Future, ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from results.academic.compiler import compile_student_results
from results.academic.types import StudentResults
from results.services.shared.errors import (
    ComputationFailed,
    ContractViolation,
    ResultsTimeout,
    ServiceError,
)

from .source import EnrollmentSource

logger = logging.getLogger(__name__)

DEFAULT_KEY_PREFIX = "student:"


def results_cache_key(student_id: str, prefix: str = DEFAULT_KEY_PREFIX) -> str:
    return f"{prefix}{student_id}"


def invalidate_cached_results(cache: Any, student_id: str, prefix: str = DEFAULT_KEY_PREFIX) -> None:
    """
    Drop the cached results of one student from a cache store.

    This only deletes the key. The generation guard that keeps an older
    computation from writing back lives in ResultsCacheCoordinator and is
    per process: with a shared Redis cache, a delete issued from another
    process (e.g. the invalidate_results command) does not stop a computation
    already running elsewhere from storing its result for the full TTL.
    """
    key = results_cache_key(student_id, prefix)
    try:
        cache.delete(key)
    except Exception as exc:
        logger.warning("results_cache_delete_failed key=%s err=%s", key, exc, extra={"student_id": student_id})
        raise ComputationFailed(f"cache unavailable while invalidating {student_id}") from exc


@dataclass
class _KeyState:
    lock: threading.Lock = field(default_factory=threading.Lock)
    generation: int = 0
    inflight: Optional[Future] = None


class ResultsCacheCoordinator:
    """
    Single-flight, cache-backed access to compiled student results.

    Per-student state records are never pruned, so the state map grows with
    the number of distinct students this process has served (one lock, one int
    and one future reference each).
    """

    def __init__(
        self,
        source: EnrollmentSource,
        cache: Any,
        *,
        ttl_seconds: int = 300,
        key_prefix: str = DEFAULT_KEY_PREFIX,
        wait_timeout_s: float | None = 30,
        max_workers: int = 4,
    ):
        if int(ttl_seconds) <= 0:
            raise ValueError("ttl_seconds must be positive")
        self._source = source
        self._cache = cache
        self._ttl = int(ttl_seconds)
        self._prefix = key_prefix
        self._wait_timeout = wait_timeout_s
        self._executor = ThreadPoolExecutor(max_workers=max(int(max_workers), 1), thread_name_prefix="results-compile")
        self._registry_lock = threading.Lock()
        self._states: Dict[str, _KeyState] = {}
        self._closed = False

    # ------------------------------------------------------------------ lifecycle

    def close(self) -> None:
        self._closed = True
        self._executor.shutdown(wait=True)

    def __enter__(self) -> "ResultsCacheCoordinator":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # ------------------------------------------------------------------ internals

    def _state(self, student_id: str) -> _KeyState:
        with self._registry_lock:
            state = self._states.get(student_id)
            if state is None:
                state = _KeyState()
                self._states[student_id] = state
            return state

    def _cache_get(self, student_id: str) -> Optional[StudentResults]:
        key = results_cache_key(student_id, self._prefix)
        try:
            hit = self._cache.get(key)
        except Exception as exc:
            logger.warning("results_cache_get_failed key=%s err=%s", key, exc, extra={"student_id": student_id})
            raise ComputationFailed(f"cache unavailable while reading results of {student_id}") from exc
        if hit is not None and not isinstance(hit, StudentResults):
            logger.warning("results_cache_foreign_value key=%s type=%s", key, type(hit).__name__)
            return None
        return hit

    def _fetch_and_compile(self, student_id: str) -> StudentResults:
        t0 = time.time()
        try:
            enrollments = list(self._source.list_enrollments(student_id))
        except ServiceError:
            raise
        except Exception as exc:
            logger.warning("results_fetch_failed err=%s", exc, extra={"student_id": student_id})
            raise ComputationFailed(f"enrollment store unavailable for {student_id}") from exc

        results = compile_student_results(enrollments, student_id=student_id)
        logger.info(
            "results_compiled student_id=%s enrollments=%s semesters=%s ms=%s",
            student_id,
            len(enrollments),
            len(results),
            int((time.time() - t0) * 1000),
            extra={"student_id": student_id},
        )
        return results

    def _run(self, student_id: str, state: _KeyState, generation: int) -> StudentResults:
        try:
            results = self._fetch_and_compile(student_id)
            key = results_cache_key(student_id, self._prefix)
            with state.lock:
                if state.generation != generation:
                    logger.info("results_stale_discarded student_id=%s", student_id, extra={"student_id": student_id})
                    return results
                try:
                    self._cache.set(key, results, self._ttl)
                except Exception as exc:
                    logger.warning("results_cache_set_failed key=%s err=%s", key, exc, extra={"student_id": student_id})
                    raise ComputationFailed(f"cache unavailable while storing results of {student_id}") from exc
            return results
        finally:
            with state.lock:
                if state.generation == generation:
                    state.inflight = None

    # ------------------------------------------------------------------ public API

    def get_results(self, student_id: str) -> StudentResults:
        student_id = str(student_id or "").strip()
        if not student_id:
            raise ContractViolation("student id is required")
        if self._closed:
            raise ComputationFailed("results coordinator is closed")

        state = self._state(student_id)
        with state.lock:
            cached = self._cache_get(student_id)
            if cached is not None:
                logger.debug("results_cache_hit student_id=%s", student_id, extra={"student_id": student_id})
                return cached
            future = state.inflight
            if future is None:
                logger.debug("results_cache_miss student_id=%s", student_id, extra={"student_id": student_id})
                try:
                    future = self._executor.submit(self._run, student_id, state, state.generation)
                except RuntimeError as exc:
                    # executor shut down after the closed check
                    raise ComputationFailed("results coordinator is closed") from exc
                state.inflight = future

        try:
            return future.result(timeout=self._wait_timeout)
        except FutureTimeoutError:
            logger.warning(
                "results_wait_timeout student_id=%s timeout_s=%s",
                student_id,
                self._wait_timeout,
                extra={"student_id": student_id},
            )
            raise ResultsTimeout(f"timed out waiting for results of {student_id}") from None

    def invalidate(self, student_id: str) -> None:
        student_id = str(student_id or "").strip()
        if not student_id:
            raise ContractViolation("student id is required")
        state = self._state(student_id)
        with state.lock:
            state.generation += 1
            state.inflight = None
            invalidate_cached_results(self._cache, student_id, self._prefix)
        logger.info("results_invalidated student_id=%s", student_id, extra={"student_id": student_id})
