"""Threshold evaluation of a single JVM sample."""

import logging

from check_jstat.errors import DivideByZero
from check_jstat.models import EvaluationResult, MetricSample, Severity, Target

log = logging.getLogger(__name__)


def ratio(used: int, maximum: int, region: str) -> int:
    """Integer percentage of used over maximum, rounded down."""
    if maximum == 0:
        raise DivideByZero(f"{region} max capacity is 0")
    return used * 100 // maximum


def perf_fragment(
    label: str,
    sample: MetricSample,
    heap_ratio: int,
    perm_ratio: int,
    warning: int,
    critical: int,
) -> str:
    """The four perfdata entries reported for one target."""
    heap_max = sample.heap_max
    perm_max = sample.perm_max
    entries = [
        f"{label}_heap={sample.heap_used}B;{heap_max * warning // 100};"
        f"{heap_max * critical // 100};0;{heap_max}",
        f"{label}_heap_ratio={heap_ratio}%;{warning};{critical};0;100",
        f"{label}_perm={sample.perm_used}B;{perm_max * warning // 100};"
        f"{perm_max * critical // 100};0;{perm_max}",
        f"{label}_perm_ratio={perm_ratio}%;{warning};{critical};0;100",
    ]
    return " ".join(entries)


def evaluate(target: Target, sample: MetricSample, warning: int, critical: int) -> EvaluationResult:
    """
    Apply warning/critical percentages to one sample.

    The first breach found wins, in this order: critical PermGen, critical
    heap, warning PermGen, warning heap. A threshold of 0 never trips, so a
    target reports a single cause even when both regions are over it.

    Raises:
        DivideByZero: heap or perm max capacity is 0.
    """
    heap_ratio = ratio(sample.heap_used, sample.heap_max, "heap")
    perm_ratio = ratio(sample.perm_used, sample.perm_max, "perm")
    label = target.label

    if critical > 0 and perm_ratio >= critical:
        severity = Severity.CRITICAL
        message = f"jstat process {label} critical PermGen ({perm_ratio}% of MaxPermSize)"
    elif critical > 0 and heap_ratio >= critical:
        severity = Severity.CRITICAL
        message = f"jstat process {label} critical Heap ({heap_ratio}% of MaxHeapSize)"
    elif warning > 0 and perm_ratio >= warning:
        severity = Severity.WARNING
        message = f"jstat process {label} warning PermGen ({perm_ratio}% of MaxPermSize)"
    elif warning > 0 and heap_ratio >= warning:
        severity = Severity.WARNING
        message = f"jstat process {label} warning Heap ({heap_ratio}% of MaxHeapSize)"
    else:
        severity = Severity.OK
        message = f"jstat process {label} alive"

    log.info(
        "%s: heap %d%% perm %d%% -> %s", label, heap_ratio, perm_ratio, severity.name
    )

    return EvaluationResult(
        target=target,
        severity=severity,
        messages=(message,),
        perf_fragment=perf_fragment(label, sample, heap_ratio, perm_ratio, warning, critical),
        heap_used=sample.heap_used,
        heap_max=sample.heap_max,
        heap_ratio=heap_ratio,
        perm_used=sample.perm_used,
        perm_max=sample.perm_max,
        perm_ratio=perm_ratio,
    )
