"""Debounced per-document revalidation with last-request-wins publishing.

Each open document owns one `PendingValidation` record. An edit cancels the armed debounce
timer and replaces the record with a new generation. A validation call that is already
dispatched is left to finish, but its result is published only while its generation is
still the latest for that document.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from functools import partial
import itertools
import logging

from riddlpy.compiler import CompilerService
from riddlpy.diagnostics import DiagnosticRecord
from riddlpy.options import DEFAULT_DEBOUNCE_DELAY, AnalysisOptions
from riddlpy.pipeline import run_validation

logger = logging.getLogger(__name__)

ValidateCallback = Callable[[str, str], Awaitable[list[DiagnosticRecord]]]
PublishCallback = Callable[[str, list[DiagnosticRecord]], None]


@dataclass(slots=True)
class PendingValidation:
    """Scheduling record for one open document."""

    generation: int
    task: asyncio.Task[None] | None = None
    dispatched: bool = False

    @property
    def is_armed(self) -> bool:
        return self.task is not None and not self.task.done() and not self.dispatched

    def disarm(self) -> None:
        """Cancel the debounce timer; a dispatched validation is left running."""
        if self.is_armed and self.task is not None:
            self.task.cancel()


class RevalidationScheduler:
    """Debounces edits per document and publishes only the newest completed validation."""

    def __init__(
        self,
        validate: ValidateCallback,
        publish: PublishCallback,
        *,
        delay: float = DEFAULT_DEBOUNCE_DELAY,
    ) -> None:
        if delay < 0:
            raise ValueError("delay cannot be negative")
        self._validate = validate
        self._publish = publish
        self._delay = delay
        self._records: dict[str, PendingValidation] = {}
        self._tasks: set[asyncio.Task[None]] = set()
        # One counter for all documents: a reopened uri never reuses an old generation.
        self._generations = itertools.count(1)

    @property
    def delay(self) -> float:
        return self._delay

    def schedule(self, uri: str, text: str) -> int:
        """Arm (or re-arm) the debounce timer for `uri`; returns the new generation."""
        previous = self._records.get(uri)
        if previous is not None and previous.is_armed:
            previous.disarm()
            logger.debug("superseded pending validation of %s (generation %d)", uri, previous.generation)

        generation = next(self._generations)
        record = PendingValidation(generation=generation)
        self._records[uri] = record
        task = asyncio.get_running_loop().create_task(self._run(uri, text, record))
        record.task = task
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        logger.debug("scheduled validation of %s (generation %d, delay %.3fs)", uri, generation, self._delay)
        return generation

    def close(self, uri: str) -> None:
        """Forget `uri`: cancel an armed timer and clear its published diagnostics."""
        record = self._records.pop(uri, None)
        if record is not None:
            record.disarm()
        logger.debug("closed %s", uri)
        self._publish(uri, [])

    def generation(self, uri: str) -> int | None:
        record = self._records.get(uri)
        return None if record is None else record.generation

    def is_pending(self, uri: str) -> bool:
        """True while a validation for `uri` is armed or in flight."""
        record = self._records.get(uri)
        return record is not None and record.task is not None and not record.task.done()

    async def wait_idle(self) -> None:
        """Wait until every armed timer and in-flight validation has finished."""
        while self._tasks:
            await asyncio.gather(*tuple(self._tasks), return_exceptions=True)

    async def shutdown(self) -> None:
        for task in tuple(self._tasks):
            task.cancel()
        await self.wait_idle()
        self._records.clear()

    def _is_current(self, uri: str, record: PendingValidation) -> bool:
        return self._records.get(uri) is record

    async def _run(self, uri: str, text: str, record: PendingValidation) -> None:
        await asyncio.sleep(self._delay)
        if not self._is_current(uri, record):
            return

        record.dispatched = True
        try:
            diagnostics = await self._validate(uri, text)
        except asyncio.CancelledError:
            raise
        except Exception:
            logger.exception("validation of %s (generation %d) failed", uri, record.generation)
            return

        if not self._is_current(uri, record):
            logger.debug("discarding stale validation of %s (generation %d)", uri, record.generation)
            return
        logger.debug("publishing %d diagnostic(s) for %s (generation %d)", len(diagnostics), uri, record.generation)
        self._publish(uri, diagnostics)


async def validate_document(
    service: CompilerService,
    uri: str,
    text: str,
    options: AnalysisOptions | None = None,
) -> list[DiagnosticRecord]:
    """Run the blocking validation pipeline in the loop's default executor."""
    loop = asyncio.get_running_loop()
    result = await loop.run_in_executor(None, partial(run_validation, text, service, origin=uri, options=options))
    return result.diagnostics
