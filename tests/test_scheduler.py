import asyncio

import pytest

from riddlpy.compiler import LocalCompilerService
from riddlpy.diagnostics import DiagnosticRecord, Phase, Severity
from riddlpy.scheduler import RevalidationScheduler, validate_document
from riddlpy.text import SourceRange
from tests._shared_cases import BAD_DOMAIN_SOURCE


def record(message: str) -> DiagnosticRecord:
    return DiagnosticRecord(
        severity_kind="Error",
        message=message,
        phase=Phase.VALIDATION,
        range=SourceRange(0, 0, 0, 1),
    )


class Recorder:
    """Validate/publish callbacks that log what the scheduler asked for."""

    def __init__(self) -> None:
        self.validated: list[tuple[str, str]] = []
        self.published: list[tuple[str, list[str]]] = []
        self.gates: dict[str, asyncio.Event] = {}

    async def validate(self, uri: str, text: str) -> list[DiagnosticRecord]:
        self.validated.append((uri, text))
        gate = self.gates.get(text)
        if gate is not None:
            await gate.wait()
        return [record(text)]

    def publish(self, uri: str, records: list[DiagnosticRecord]) -> None:
        self.published.append((uri, [r.message for r in records]))


def test_rapid_edits_validate_only_the_last_text() -> None:
    async def scenario() -> Recorder:
        recorder = Recorder()
        scheduler = RevalidationScheduler(recorder.validate, recorder.publish, delay=0.02)

        first = scheduler.schedule("doc", "one")
        scheduler.schedule("doc", "two")
        last = scheduler.schedule("doc", "three")
        assert scheduler.is_pending("doc")
        assert last > first
        assert scheduler.generation("doc") == last

        await scheduler.wait_idle()
        assert not scheduler.is_pending("doc")
        return recorder

    recorder = asyncio.run(scenario())

    assert recorder.validated == [("doc", "three")]
    assert recorder.published == [("doc", ["three"])]


def test_documents_are_debounced_independently() -> None:
    async def scenario() -> Recorder:
        recorder = Recorder()
        scheduler = RevalidationScheduler(recorder.validate, recorder.publish, delay=0.01)
        scheduler.schedule("a", "a1")
        scheduler.schedule("b", "b1")
        scheduler.schedule("a", "a2")
        await scheduler.wait_idle()
        return recorder

    recorder = asyncio.run(scenario())

    assert sorted(recorder.published) == [("a", ["a2"]), ("b", ["b1"])]


def test_stale_result_finishing_late_is_discarded() -> None:
    async def scenario() -> Recorder:
        recorder = Recorder()
        recorder.gates["old"] = asyncio.Event()
        scheduler = RevalidationScheduler(recorder.validate, recorder.publish, delay=0)

        scheduler.schedule("doc", "old")
        await asyncio.sleep(0.01)
        assert recorder.validated == [("doc", "old")]

        scheduler.schedule("doc", "new")
        await asyncio.sleep(0.01)
        assert recorder.published == [("doc", ["new"])]

        recorder.gates["old"].set()
        await scheduler.wait_idle()
        return recorder

    recorder = asyncio.run(scenario())

    assert recorder.validated == [("doc", "old"), ("doc", "new")]
    assert recorder.published == [("doc", ["new"])]


def test_close_cancels_pending_timer_and_clears_diagnostics() -> None:
    async def scenario() -> tuple[Recorder, RevalidationScheduler]:
        recorder = Recorder()
        scheduler = RevalidationScheduler(recorder.validate, recorder.publish, delay=0.05)
        scheduler.schedule("doc", "text")
        scheduler.close("doc")
        await scheduler.wait_idle()
        return recorder, scheduler

    recorder, scheduler = asyncio.run(scenario())

    assert recorder.validated == []
    assert recorder.published == [("doc", [])]
    assert scheduler.generation("doc") is None
    assert not scheduler.is_pending("doc")


def test_result_in_flight_at_close_is_not_published() -> None:
    async def scenario() -> Recorder:
        recorder = Recorder()
        recorder.gates["slow"] = asyncio.Event()
        scheduler = RevalidationScheduler(recorder.validate, recorder.publish, delay=0)
        scheduler.schedule("doc", "slow")
        await asyncio.sleep(0.01)
        scheduler.close("doc")
        recorder.gates["slow"].set()
        await scheduler.wait_idle()
        return recorder

    recorder = asyncio.run(scenario())

    assert recorder.published == [("doc", [])]


def test_reopened_document_ignores_results_from_before_close() -> None:
    async def scenario() -> tuple[Recorder, int, int]:
        recorder = Recorder()
        recorder.gates["before"] = asyncio.Event()
        scheduler = RevalidationScheduler(recorder.validate, recorder.publish, delay=0)

        before = scheduler.schedule("doc", "before")
        await asyncio.sleep(0.01)
        scheduler.close("doc")
        after = scheduler.schedule("doc", "after")
        await asyncio.sleep(0.01)
        recorder.gates["before"].set()
        await scheduler.wait_idle()
        return recorder, before, after

    recorder, before, after = asyncio.run(scenario())

    assert after > before
    assert recorder.published == [("doc", []), ("doc", ["after"])]


def test_failing_validate_publishes_nothing_and_keeps_scheduling() -> None:
    async def scenario() -> list[tuple[str, list[str]]]:
        published: list[tuple[str, list[str]]] = []

        async def validate(uri: str, text: str) -> list[DiagnosticRecord]:
            if text == "bad":
                raise RuntimeError("boom")
            return [record(text)]

        scheduler = RevalidationScheduler(
            validate,
            lambda uri, records: published.append((uri, [r.message for r in records])),
            delay=0,
        )
        scheduler.schedule("doc", "bad")
        await scheduler.wait_idle()
        scheduler.schedule("doc", "good")
        await scheduler.wait_idle()
        return published

    assert asyncio.run(scenario()) == [("doc", ["good"])]


def test_shutdown_cancels_everything() -> None:
    async def scenario() -> tuple[Recorder, RevalidationScheduler]:
        recorder = Recorder()
        scheduler = RevalidationScheduler(recorder.validate, recorder.publish, delay=10)
        scheduler.schedule("a", "x")
        scheduler.schedule("b", "y")
        await scheduler.shutdown()
        return recorder, scheduler

    recorder, scheduler = asyncio.run(scenario())

    assert recorder.validated == []
    assert recorder.published == []
    assert not scheduler.is_pending("a")
    assert scheduler.generation("b") is None


def test_negative_delay_is_rejected() -> None:
    with pytest.raises(ValueError):
        RevalidationScheduler(Recorder().validate, Recorder().publish, delay=-1)


def test_validate_document_runs_pipeline_off_loop() -> None:
    diagnostics = asyncio.run(validate_document(LocalCompilerService(), "file:///bad.riddl", BAD_DOMAIN_SOURCE))

    assert len(diagnostics) == 1
    assert diagnostics[0].severity == Severity.ERROR
    assert diagnostics[0].phase == Phase.SYNTAX
