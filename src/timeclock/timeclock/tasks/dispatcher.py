from __future__ import annotations

import logging
import time
from concurrent.futures import Executor, Future
from datetime import date
from typing import Callable, Optional

from ..common.datetime_utils import now_local
from .model import BackfillReport
from .repository import DeadLetterRepository

logger = logging.getLogger(__name__)


class ReconciliationDispatcher:
    """Run reconciliation jobs off the punch request path.

    Each job gets `max_attempts` tries with linear backoff. A job that still
    fails is written to the dead-letter store for `backfill()`. Errors are
    logged here and never reach whoever dispatched the job.
    """

    def __init__(
        self,
        engine,
        dead_letters: DeadLetterRepository,
        *,
        max_attempts: int = 3,
        backoff_seconds: float = 0.5,
        executor: Optional[Executor] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        if int(max_attempts) < 1:
            raise ValueError("max_attempts must be >= 1")
        self._engine = engine
        self._dead_letters = dead_letters
        self._max_attempts = int(max_attempts)
        self._backoff = float(backoff_seconds)
        self._executor = executor
        self._sleep = sleep

    def dispatch(self, employee_id: int, work_date: date) -> Optional[Future]:
        """Queue reconciliation for one employee-day.

        Runs inline when no executor is configured; otherwise returns the Future.
        """
        if self._executor is None:
            self._run(employee_id, work_date)
            return None
        return self._executor.submit(self._run, employee_id, work_date)

    def _run(self, employee_id: int, work_date: date) -> bool:
        last_error: Optional[BaseException] = None
        for attempt in range(1, self._max_attempts + 1):
            try:
                self._engine.reconcile(employee_id, work_date)
                return True
            except Exception as exc:
                last_error = exc
                logger.warning(
                    "Reconciliation attempt %s/%s failed for employee %s on %s: %s",
                    attempt,
                    self._max_attempts,
                    employee_id,
                    work_date,
                    exc,
                )
                if attempt < self._max_attempts and self._backoff > 0:
                    self._sleep(self._backoff * attempt)

        logger.error(
            "Reconciliation gave up for employee %s on %s after %s attempts",
            employee_id,
            work_date,
            self._max_attempts,
            exc_info=last_error,
        )
        self._dead_letter(employee_id, work_date, last_error)
        return False

    def _dead_letter(self, employee_id: int, work_date: date, error: Optional[BaseException]) -> None:
        try:
            self._dead_letters.record(
                employee_id=int(employee_id),
                work_date=work_date,
                attempts=self._max_attempts,
                last_error=f"{type(error).__name__}: {error}",
                failed_at=now_local(),
            )
        except Exception:
            # The punch is already stored; losing the dead letter only delays the backfill.
            logger.exception("Could not record dead letter for employee %s on %s", employee_id, work_date)

    def backfill(self, *, limit: int = 100) -> BackfillReport:
        """Retry open dead letters once each; mark the ones that now succeed."""
        failures = self._dead_letters.list_open(limit=limit)
        resolved = 0
        for failure in failures:
            try:
                self._engine.reconcile(failure.employee_id, failure.work_date)
            except Exception:
                logger.exception(
                    "Backfill failed for employee %s on %s (failure %s)",
                    failure.employee_id,
                    failure.work_date,
                    failure.failure_id,
                )
                continue
            self._dead_letters.mark_resolved(failure.failure_id, resolved_at=now_local())
            resolved += 1

        report = BackfillReport(retried=len(failures), resolved=resolved, still_failing=len(failures) - resolved)
        logger.info("Backfill done: %s", report)
        return report

    def shutdown(self, *, wait: bool = True) -> None:
        if self._executor is not None:
            self._executor.shutdown(wait=wait)
