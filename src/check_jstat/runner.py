"""Per-target check pipeline."""

import logging
import threading
from queue import Empty, Queue
from typing import Protocol

from check_jstat.errors import (
    DivideByZero,
    JstatError,
    NotJavaProcess,
    ParseError,
    ProcessNotFound,
    StatisticsUnavailable,
)
from check_jstat.evaluator import evaluate
from check_jstat.models import CheckSettings, EvaluationResult, Target
from check_jstat.parser import LAYOUTS, parse
from check_jstat.validator import ProcessValidator

log = logging.getLogger(__name__)


class StatisticsProvider(Protocol):
    def gc(self, pid: int) -> str: ...

    def gccapacity(self, pid: int) -> str: ...


class CheckRunner:
    """
    Runs validate, fetch, parse and evaluate for every target.

    Failures are contained per target: a JstatError becomes a CRITICAL
    result for that target only. With more than one job the targets are
    checked on worker threads, and results are still returned in target
    order.
    """

    def __init__(
        self,
        settings: CheckSettings,
        source: StatisticsProvider,
        validator: ProcessValidator,
    ) -> None:
        """
        Initialize the CheckRunner.

        Args:
            settings: Thresholds, layout and job count.
            source: Provider of raw jstat output.
            validator: Liveness/identity check applied before jstat runs.
        """
        self._settings = settings
        self._source = source
        self._validator = validator
        self._layout = LAYOUTS[settings.layout]

    @property
    def settings(self) -> CheckSettings:
        return self._settings

    def run(self, targets: list[Target]) -> list[EvaluationResult]:
        """Check all targets, returning results in the order given."""
        if self._settings.jobs <= 1 or len(targets) <= 1:
            return [self.check(target) for target in targets]
        return self._run_threaded(targets)

    def check(self, target: Target) -> EvaluationResult:
        """Check a single target. Never raises JstatError."""
        try:
            return self._check(target)
        except JstatError as e:
            message = self._describe(target, e)
            log.info("%s: %s", target.label, message)
            return EvaluationResult.failed(target, message)

    def _check(self, target: Target) -> EvaluationResult:
        self._validator.validate(target.pid)

        try:
            gc_text = self._source.gc(target.pid)
        except StatisticsUnavailable as e:
            raise StatisticsUnavailable(f"Can't get GC statistics for {target.label}") from e

        try:
            capacity_text = self._source.gccapacity(target.pid)
        except StatisticsUnavailable as e:
            raise StatisticsUnavailable(f"Can't get GC capacity for {target.label}") from e

        sample = parse(gc_text, capacity_text, self._layout)
        return evaluate(target, sample, self._settings.warning, self._settings.critical)

    @staticmethod
    def _describe(target: Target, error: JstatError) -> str:
        if isinstance(error, (ProcessNotFound, NotJavaProcess, StatisticsUnavailable)):
            return str(error)
        if isinstance(error, ParseError):
            return f"Can't parse GC statistics for {target.label}: {error}"
        if isinstance(error, DivideByZero):
            return f"jstat process {target.label} reports a zero capacity ({error})"
        return f"jstat process {target.label}: {error}"

    def _run_threaded(self, targets: list[Target]) -> list[EvaluationResult]:
        pending: Queue[tuple[int, Target]] = Queue()
        done: Queue[tuple[int, EvaluationResult]] = Queue()
        errors: Queue[BaseException] = Queue()
        for item in enumerate(targets):
            pending.put(item)

        def worker() -> None:
            while True:
                try:
                    index, target = pending.get_nowait()
                except Empty:
                    return
                try:
                    done.put((index, self.check(target)))
                except Exception as e:
                    errors.put(e)
                    return

        workers = [
            threading.Thread(target=worker, daemon=True, name=f"CheckRunner-{n}")
            for n in range(min(self._settings.jobs, len(targets)))
        ]
        for thread in workers:
            thread.start()
        for thread in workers:
            thread.join()

        if not errors.empty():
            raise errors.get_nowait()

        results: list[tuple[int, EvaluationResult]] = []
        while not done.empty():
            results.append(done.get_nowait())
        results.sort(key=lambda item: item[0])
        return [result for _, result in results]
