"""Exceptions raised while checking JVM targets."""


class JstatError(Exception):
    """Base class for all check_jstat errors."""


class SelectionError(JstatError):
    """No usable target could be selected. Fatal, reported as UNKNOWN."""


class ProcessNotFound(JstatError):
    """No OS process exists with the requested pid."""

    def __init__(self, pid: int) -> None:
        super().__init__(f"process pid[{pid}] not found")
        self.pid = pid


class NotJavaProcess(JstatError):
    """The process exists but is not a JVM."""

    def __init__(self, pid: int, name: str) -> None:
        super().__init__(f"process pid[{pid}] seems not to be a JAVA application")
        self.pid = pid
        self.name = name


class StatisticsUnavailable(JstatError):
    """jstat (or jps) failed, timed out or printed nothing."""


class ParseError(JstatError):
    """jstat output did not match the expected column layout."""


class DivideByZero(JstatError):
    """A capacity reading needed as a ratio denominator is zero."""
