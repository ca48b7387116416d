"""Running the JDK tools that expose GC statistics."""

import logging
import os
import shutil
import subprocess

from check_jstat.errors import SelectionError, StatisticsUnavailable

log = logging.getLogger(__name__)


class JstatSource:
    """
    Runs ``jstat`` and ``jps`` and returns their raw text output.

    Every call is bounded by ``timeout`` seconds; a tool that is missing,
    fails, hangs or prints nothing raises StatisticsUnavailable.
    """

    def __init__(self, java_home: str | None = None, timeout: float = 10.0) -> None:
        """
        Initialize the JstatSource.

        Args:
            java_home: JDK installation to take the tools from. Default: PATH.
            timeout: Per-command timeout in seconds.

        Raises:
            SelectionError: java_home has no executable bin/jstat.
        """
        self._timeout = timeout
        self._bin_dir: str | None = None
        if java_home:
            bin_dir = os.path.join(java_home, "bin")
            if not os.access(os.path.join(bin_dir, "jstat"), os.X_OK):
                raise SelectionError(f"jstat not found in {bin_dir}")
            self._bin_dir = bin_dir

    @property
    def timeout(self) -> float:
        return self._timeout

    def _tool(self, name: str) -> str:
        if self._bin_dir is not None:
            return os.path.join(self._bin_dir, name)
        path = shutil.which(name)
        if path is None:
            raise StatisticsUnavailable(f"{name} not found on PATH")
        return path

    def _run(self, *args: str) -> str:
        command = [self._tool(args[0]), *args[1:]]
        log.debug("running %s", " ".join(command))
        try:
            completed = subprocess.run(
                command,
                capture_output=True,
                text=True,
                timeout=self._timeout,
                check=False,
            )
        except subprocess.TimeoutExpired:
            raise StatisticsUnavailable(
                f"{args[0]} timed out after {self._timeout:g}s"
            ) from None
        except OSError as e:
            raise StatisticsUnavailable(f"{args[0]} could not be run: {e}") from e

        if completed.returncode != 0:
            log.info("%s exited with %d: %s", args[0], completed.returncode, completed.stderr.strip())
            raise StatisticsUnavailable(f"{args[0]} exited with status {completed.returncode}")
        if not completed.stdout.strip():
            raise StatisticsUnavailable(f"{args[0]} printed nothing")
        return completed.stdout

    def gc(self, pid: int) -> str:
        """Output of ``jstat -gc <pid>``."""
        return self._run("jstat", "-gc", str(pid))

    def gccapacity(self, pid: int) -> str:
        """Output of ``jstat -gccapacity <pid>``."""
        return self._run("jstat", "-gccapacity", str(pid))

    def jps(self, verbose: bool = False) -> str:
        """Output of ``jps`` (``jps -v`` when verbose)."""
        if verbose:
            return self._run("jps", "-v")
        return self._run("jps")
