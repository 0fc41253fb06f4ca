"""
Capacity Ledger

Sole writer of an event's seat counters. Every mutation is an optimistic
read-compute-conditional-write cycle:

    snapshot = get_capacity(event_id)            # counters + version
    updated  = snapshot.capacity.reserve()       # domain rule, may raise EventFullError
    compare_and_set_capacity(event_id, snapshot.version, updated)

A False from compare_and_set_capacity means another writer changed the event
between read and write; the cycle is repeated against the fresh snapshot with
exponential backoff and full jitter until max_attempts is spent.
"""

import random
import time
from typing import Callable

import anyio
from opentelemetry import trace

from src.platform.logging.loguru_io import Logger
from src.platform.metrics.registration_metrics import metrics
from src.service.event_registration.app.interface.i_event_command_repo import IEventCommandRepo
from src.service.event_registration.domain.registration_error import (
    CapacityConflictError,
    EventFullError,
    EventNotFoundError,
)
from src.service.event_registration.domain.value_object.event_capacity import EventCapacity


class CapacityLedger:
    def __init__(
        self,
        *,
        max_attempts: int = 8,
        backoff_base_seconds: float = 0.005,
        backoff_max_seconds: float = 0.2,
    ) -> None:
        if max_attempts < 1:
            raise ValueError('max_attempts must be at least 1')
        self.max_attempts = max_attempts
        self.backoff_base_seconds = backoff_base_seconds
        self.backoff_max_seconds = backoff_max_seconds
        self.tracer = trace.get_tracer(__name__)

    @Logger.io
    async def reserve(self, *, event_repo: IEventCommandRepo, event_id: str) -> EventCapacity:
        """
        Take one seat.

        Raises:
            EventNotFoundError: event does not exist
            EventFullError: reserved already equals total
            CapacityConflictError: every attempt lost its race
        """
        return await self._apply(
            operation='reserve',
            event_repo=event_repo,
            event_id=event_id,
            change=lambda capacity: capacity.reserve(),
        )

    @Logger.io
    async def release(self, *, event_repo: IEventCommandRepo, event_id: str) -> EventCapacity:
        """
        Return one seat, clamped at zero reserved.

        Not idempotent: call exactly once per seat actually reserved.
        """
        return await self._apply(
            operation='release',
            event_repo=event_repo,
            event_id=event_id,
            change=lambda capacity: capacity.release(),
        )

    @Logger.io
    async def resize(
        self, *, event_repo: IEventCommandRepo, event_id: str, total: int
    ) -> EventCapacity:
        return await self._apply(
            operation='resize',
            event_repo=event_repo,
            event_id=event_id,
            change=lambda capacity: capacity.resize(total=total),
        )

    async def _apply(
        self,
        *,
        operation: str,
        event_repo: IEventCommandRepo,
        event_id: str,
        change: Callable[[EventCapacity], EventCapacity],
    ) -> EventCapacity:
        started = time.perf_counter()
        with self.tracer.start_as_current_span(f'capacity_ledger.{operation}') as span:
            span.set_attribute('event_id', event_id)
            try:
                for attempt in range(1, self.max_attempts + 1):
                    snapshot = await event_repo.get_capacity(event_id=event_id)
                    if snapshot is None:
                        raise EventNotFoundError()

                    updated = change(snapshot.capacity)
                    if await event_repo.compare_and_set_capacity(
                        event_id=event_id, expected_version=snapshot.version, capacity=updated
                    ):
                        span.set_attribute('attempts', attempt)
                        metrics.record_capacity_operation(
                            operation=operation,
                            result='ok',
                            duration=time.perf_counter() - started,
                        )
                        return updated

                    metrics.record_cas_retry(operation=operation)
                    if attempt < self.max_attempts:
                        delay = self._backoff_delay(attempt)
                        Logger.base.debug(
                            f'[LEDGER] {operation} on event {event_id} lost race '
                            f'(attempt {attempt}/{self.max_attempts}), retrying in {delay:.4f}s'
                        )
                        await anyio.sleep(delay)
            except EventFullError:
                self._record_failure(operation=operation, result='full', started=started)
                raise
            except EventNotFoundError:
                self._record_failure(operation=operation, result='not_found', started=started)
                raise

            self._record_failure(operation=operation, result='conflict', started=started)
            Logger.base.error(
                f'[LEDGER] {operation} on event {event_id} gave up after '
                f'{self.max_attempts} conflicting attempts'
            )
            raise CapacityConflictError(event_id=event_id, attempts=self.max_attempts)

    def _backoff_delay(self, attempt: int) -> float:
        ceiling = min(self.backoff_max_seconds, self.backoff_base_seconds * 2 ** (attempt - 1))
        return random.uniform(0, ceiling)

    @staticmethod
    def _record_failure(*, operation: str, result: str, started: float) -> None:
        metrics.record_capacity_operation(
            operation=operation, result=result, duration=time.perf_counter() - started
        )
