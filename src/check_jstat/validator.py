"""Liveness and identity checks for target processes."""

import logging
from dataclasses import dataclass

import psutil

from check_jstat.errors import NotJavaProcess, ProcessNotFound

log = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class ProcessOutcome:
    """Result of a successful validation."""

    pid: int
    alive: bool
    is_java: bool
    name: str | None = None  # None when the name could not be read


def launcher_name(name: str) -> str:
    """Process name without the Windows executable suffix (java.exe -> java)."""
    if name.lower().endswith(".exe"):
        return name[:-4]
    return name


class ProcessValidator:
    """Confirms that a pid belongs to a running JVM."""

    def validate(self, pid: int) -> ProcessOutcome:
        """
        Check one pid.

        Raises:
            ProcessNotFound: no process with this pid.
            NotJavaProcess: the process is known not to be a JVM.
        """
        raise NotImplementedError


class PermissiveValidator(ProcessValidator):
    """
    Validator for platforms without process introspection.

    Every pid passes; whether jstat can attach decides instead.
    """

    def validate(self, pid: int) -> ProcessOutcome:
        return ProcessOutcome(pid=pid, alive=True, is_java=True)


class PsutilValidator(ProcessValidator):
    """
    Validator backed by psutil.

    The launcher name is compared without a Windows ".exe" suffix, and the
    "w" variant (javaw) is accepted. The name check is best effort: AccessDenied and ZombieProcess while
    reading the name skip it instead of failing the target.
    """

    def __init__(self, expected_name: str = "java") -> None:
        """
        Initialize the PsutilValidator.

        Args:
            expected_name: Process name of the JVM launcher.
        """
        self._expected_name = expected_name

    @property
    def expected_name(self) -> str:
        return self._expected_name

    def validate(self, pid: int) -> ProcessOutcome:
        if not psutil.pid_exists(pid):
            raise ProcessNotFound(pid)

        try:
            name = psutil.Process(pid).name()
        except (psutil.AccessDenied, psutil.ZombieProcess):
            # ZombieProcess subclasses NoSuchProcess, keep it first
            log.info("pid %d: process name unavailable, skipping JVM check", pid)
            return ProcessOutcome(pid=pid, alive=True, is_java=True)
        except psutil.NoSuchProcess:
            # Exited between the two calls
            raise ProcessNotFound(pid) from None

        if launcher_name(name) not in (self._expected_name, f"{self._expected_name}w"):
            log.debug("pid %d is %r, expected %r", pid, name, self._expected_name)
            raise NotJavaProcess(pid, name)

        return ProcessOutcome(pid=pid, alive=True, is_java=True, name=name)


def default_validator(expected_name: str = "java") -> ProcessValidator:
    """Pick the validator for the running platform."""
    try:
        psutil.Process().name()
    except (psutil.AccessDenied, NotImplementedError):
        log.info("process introspection unavailable, validation disabled")
        return PermissiveValidator()
    return PsutilValidator(expected_name)
