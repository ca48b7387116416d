"""Folding per-target results into the final report."""

from collections.abc import Iterable

from check_jstat.models import AggregateResult, EvaluationResult, Severity


def aggregate(results: Iterable[EvaluationResult]) -> AggregateResult:
    """
    Fold results, in target order, into one AggregateResult.

    The overall severity is the highest ranked one seen; UNKNOWN ranks with
    CRITICAL and, on equal rank, the first one seen is kept. Messages are
    bucketed by the severity that produced them. No results at all is
    UNKNOWN.
    """
    overall: Severity | None = None
    critical: list[str] = []
    warning: list[str] = []
    ok: list[str] = []
    fragments: list[str] = []

    for result in results:
        if overall is None or result.severity.rank > overall.rank:
            overall = result.severity

        if result.severity is Severity.OK:
            ok.extend(result.messages)
        elif result.severity is Severity.WARNING:
            warning.extend(result.messages)
        else:
            critical.extend(result.messages)

        if result.perf_fragment:
            fragments.append(result.perf_fragment)

    return AggregateResult(
        severity=overall if overall is not None else Severity.UNKNOWN,
        critical_messages=tuple(critical),
        warning_messages=tuple(warning),
        ok_messages=tuple(ok),
        perfdata=" ".join(fragments),
    )
