"""Data models for check_jstat."""

from dataclasses import dataclass
from enum import Enum


class Severity(Enum):
    """Nagios service states. The value is the plugin exit code."""

    OK = 0
    WARNING = 1
    CRITICAL = 2
    UNKNOWN = 3

    @property
    def rank(self) -> int:
        """Alarm priority used when folding results; UNKNOWN ranks with CRITICAL."""
        return min(self.value, Severity.CRITICAL.value)

    @property
    def exit_code(self) -> int:
        return self.value


@dataclass(slots=True, frozen=True)
class Target:
    """One process to check."""

    pid: int
    label: str = ""

    def __post_init__(self) -> None:
        if self.pid <= 0:
            raise ValueError(f"pid must be positive, got {self.pid}")
        if not self.label:
            object.__setattr__(self, "label", str(self.pid))


@dataclass(slots=True, frozen=True)
class MetricSample:
    """Memory readings of one JVM at one instant, all in bytes."""

    eden_used: int
    old_used: int
    perm_used: int
    young_max: int
    old_max: int
    perm_max: int

    @property
    def heap_used(self) -> int:
        return self.eden_used + self.old_used

    @property
    def heap_max(self) -> int:
        return self.young_max + self.old_max


@dataclass(slots=True, frozen=True)
class EvaluationResult:
    """
    Outcome of checking one target.

    Readings are None when the target failed before it could be evaluated
    (process gone, jstat unavailable, unparseable output).
    """

    target: Target
    severity: Severity
    messages: tuple[str, ...]
    perf_fragment: str = ""
    heap_used: int | None = None
    heap_max: int | None = None
    heap_ratio: int | None = None
    perm_used: int | None = None
    perm_max: int | None = None
    perm_ratio: int | None = None

    @classmethod
    def failed(cls, target: Target, message: str) -> "EvaluationResult":
        """Build the CRITICAL result of a target that could not be evaluated."""
        return cls(target=target, severity=Severity.CRITICAL, messages=(message,))


@dataclass(slots=True, frozen=True)
class AggregateResult:
    """Whole-run outcome, folded from every EvaluationResult in target order."""

    severity: Severity
    critical_messages: tuple[str, ...] = ()
    warning_messages: tuple[str, ...] = ()
    ok_messages: tuple[str, ...] = ()
    perfdata: str = ""

    @property
    def exit_code(self) -> int:
        return self.severity.exit_code

    @property
    def is_empty(self) -> bool:
        return not (self.critical_messages or self.warning_messages or self.ok_messages)

    def render(self) -> str:
        """Render the single Nagios status line."""
        crit = ", ".join(self.critical_messages)
        warn = ", ".join(self.warning_messages)
        ok = ", ".join(self.ok_messages)

        if self.severity is Severity.OK:
            status = f"OK:{ok}"
        elif self.severity is Severity.WARNING:
            status = f"WARNING:{warn} OK:{ok}"
        elif self.severity is Severity.CRITICAL:
            status = f"CRITICAL:{crit} WARNING:{warn} OK:{ok}"
        elif self.is_empty:
            status = "UNKNOWN:no target produced a result"
        else:
            status = f"UNKNOWN:{crit} WARNING:{warn} OK:{ok}"
        return f"{status}|{self.perfdata}"


@dataclass(slots=True, frozen=True)
class CheckSettings:
    """Validated check parameters, built once by the command line front end."""

    warning: int = 90  # percent, 0 disables the tier
    critical: int = 95  # percent, 0 disables the tier
    java_home: str | None = None
    timeout: float = 10.0  # seconds, per jstat/jps call
    jobs: int = 1
    expected_name: str = "java"
    layout: str = "jdk8"

    def __post_init__(self) -> None:
        if self.warning < 0 or self.critical < 0:
            raise ValueError("thresholds must not be negative")
        if self.timeout <= 0:
            raise ValueError("timeout must be positive")
        if self.jobs < 1:
            raise ValueError("jobs must be at least 1")
