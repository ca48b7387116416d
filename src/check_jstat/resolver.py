"""Selecting the JVM processes to check."""

import logging
import os
import re
from collections.abc import Iterable
from typing import Protocol

from check_jstat.errors import SelectionError, StatisticsUnavailable
from check_jstat.models import Target

log = logging.getLogger(__name__)

DEFAULT_RUN_DIR = "/var/run"


class JpsProvider(Protocol):
    def jps(self, verbose: bool = False) -> str: ...


def from_pids(pids: Iterable[int]) -> list[Target]:
    """One target per pid, labelled with the pid itself."""
    targets = []
    for pid in pids:
        try:
            targets.append(Target(pid=int(pid)))
        except ValueError as e:
            raise SelectionError(f"invalid pid {pid!r}") from e
    if not targets:
        raise SelectionError("no pid given")
    return targets


def from_service(service: str, run_dir: str = DEFAULT_RUN_DIR) -> list[Target]:
    """
    Targets from the pid file ``<run_dir>/<service>.pid``.

    Every whitespace-separated pid in the file becomes a target labelled
    with the service name.
    """
    pid_file = os.path.join(run_dir, f"{service}.pid")
    try:
        with open(pid_file, encoding="ascii") as f:
            content = f.read()
    except (OSError, UnicodeDecodeError):
        raise SelectionError(f"{pid_file} not found") from None

    fields = content.split()
    if not fields:
        raise SelectionError(f"{pid_file} is empty")
    try:
        targets = [Target(pid=int(field), label=service) for field in fields]
    except ValueError:
        raise SelectionError(f"{pid_file} does not hold a valid pid") from None

    log.debug("%s -> %s", pid_file, [t.pid for t in targets])
    return targets


def from_jps(name: str, source: JpsProvider, verbose: bool = False) -> list[Target]:
    """
    The single JVM whose ``jps`` line matches the regular expression ``name``.

    With an empty name any JVM other than jps itself matches. Verbose mode
    searches ``jps -v`` output, which includes the JVM arguments. Zero or
    several matches is a selection error.
    """
    try:
        output = source.jps(verbose=bool(name) and verbose)
    except StatisticsUnavailable as e:
        raise SelectionError(f"jps failed: {e}") from e

    lines = [line for line in output.splitlines() if line.strip()]
    if name:
        try:
            pattern = re.compile(name)
        except re.error as e:
            raise SelectionError(f"invalid java name pattern {name!r}: {e}") from None
        matches = [line for line in lines if pattern.search(line)]
    else:
        matches = [line for line in lines if "Jps" not in line]

    if len(matches) != 1:
        log.info("jps search for %r matched %d processes", name, len(matches))
        raise SelectionError("No (or multiple) java app found")

    columns = matches[0].split()
    try:
        pid = int(columns[0])
    except ValueError:
        raise SelectionError(f"unexpected jps output: {matches[0]!r}") from None

    label = name or (columns[1] if len(columns) > 1 else "")
    return [Target(pid=pid, label=label)]
