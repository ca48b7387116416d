"""check_jstat - Nagios plugin entry point."""

import argparse
import logging
import sys
from collections.abc import Sequence

from check_jstat.aggregator import aggregate
from check_jstat.errors import SelectionError
from check_jstat.models import CheckSettings, Severity, Target
from check_jstat.parser import LAYOUTS
from check_jstat.resolver import from_jps, from_pids, from_service
from check_jstat.runner import CheckRunner
from check_jstat.source import JstatSource
from check_jstat.validator import default_validator

__version__ = "1.5.0"

log = logging.getLogger("check_jstat")

DESCRIPTION = """\
Check heap and PermGen/metaspace usage of running JVMs.

The process is selected by pid (-p, may be repeated), by the pid file
/var/run/<service>.pid (-s) or by searching the jps output (-j, -J).
It must be running and be a java process; jstat -gc and
jstat -gccapacity then give the current and maximum sizes of the heap
(eden + old generation) and of the PermGen/metaspace.
"""


class NagiosArgumentParser(argparse.ArgumentParser):
    """ArgumentParser reporting usage errors with the UNKNOWN exit code."""

    def error(self, message: str) -> None:  # type: ignore[override]
        self.print_usage(sys.stderr)
        self.exit(Severity.UNKNOWN.exit_code, f"{self.prog}: error: {message}\n")


class HelpAction(argparse.Action):
    """Print the help and exit UNKNOWN, as monitoring plugins do."""

    def __init__(self, option_strings, dest=argparse.SUPPRESS, default=argparse.SUPPRESS, help=None):
        super().__init__(option_strings=option_strings, dest=dest, default=default, nargs=0, help=help)

    def __call__(self, parser, namespace, values, option_string=None):
        parser.print_help()
        parser.exit(Severity.UNKNOWN.exit_code)


def percent(value: str) -> int:
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"{value} is negative")
    return number


def positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"{value} is not a positive integer")
    return number


def positive_float(value: str) -> float:
    number = float(value)
    if number <= 0:
        raise argparse.ArgumentTypeError(f"{value} is not positive")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = NagiosArgumentParser(
        prog="check_jstat",
        description=DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        add_help=False,
    )
    parser.add_argument("-h", "--help", action=HelpAction, help="show this help message and exit")
    selection = parser.add_mutually_exclusive_group(required=True)
    selection.add_argument(
        "-p", "--pid", dest="pids", type=positive_int, action="append", metavar="PID",
        help="the PID of a process to monitor, may be given several times",
    )
    selection.add_argument(
        "-s", "--service", metavar="SERVICE",
        help="the service name of the process to monitor",
    )
    selection.add_argument(
        "-j", "--java-name", metavar="NAME",
        help="regular expression matching the java app (see jps) to monitor; '' matches any java app, as long as there is only one",
    )
    selection.add_argument(
        "-J", "--java-name-verbose", metavar="NAME",
        help="same as -j but searches the 'jps -v' output",
    )
    parser.add_argument("-P", "--java-home", help="use this java installation")
    parser.add_argument(
        "-w", "--warning", type=percent, default=90, metavar="PCT",
        help="warning threshold of the current/max ratio in %% (default: 90, 0 disables)",
    )
    parser.add_argument(
        "-c", "--critical", type=percent, default=95, metavar="PCT",
        help="critical threshold of the current/max ratio in %% (default: 95, 0 disables)",
    )
    parser.add_argument(
        "-t", "--timeout", type=positive_float, default=10.0, metavar="SECONDS",
        help="timeout of each jstat/jps call (default: 10)",
    )
    parser.add_argument(
        "--jobs", type=positive_int, default=1,
        help="number of processes checked in parallel (default: 1)",
    )
    parser.add_argument(
        "--layout", choices=sorted(LAYOUTS), default="jdk8",
        help="jstat column layout (default: jdk8)",
    )
    parser.add_argument(
        "-v", "--verbose", action="count", default=0,
        help="log to stderr, repeat for more detail",
    )
    parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def setup_logging(verbosity: int) -> None:
    """Send check_jstat log records to stderr; stdout is reserved for the status line."""
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.WARNING

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    log.handlers[:] = [handler]
    log.setLevel(level)
    log.propagate = False


def select_targets(args: argparse.Namespace, source: JstatSource) -> list[Target]:
    if args.pids:
        return from_pids(args.pids)
    if args.service is not None:
        return from_service(args.service)
    if args.java_name_verbose is not None:
        return from_jps(args.java_name_verbose, source, verbose=True)
    return from_jps(args.java_name, source)


def run(argv: Sequence[str] | None = None) -> int:
    """Run the check, print the status line and return the exit code."""
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    settings = CheckSettings(
        warning=args.warning,
        critical=args.critical,
        java_home=args.java_home,
        timeout=args.timeout,
        jobs=args.jobs,
        layout=args.layout,
    )

    try:
        source = JstatSource(settings.java_home, settings.timeout)
        targets = select_targets(args, source)
    except SelectionError as e:
        print(f"UNKNOWN: {e}")
        return Severity.UNKNOWN.exit_code

    log.info("checking %s", ", ".join(f"{t.label}[{t.pid}]" for t in targets))
    runner = CheckRunner(settings, source, default_validator(settings.expected_name))
    result = aggregate(runner.run(targets))
    print(result.render())
    return result.exit_code


def main() -> None:
    """Entry point for the check_jstat command."""
    try:
        code = run()
    except Exception as e:
        log.debug("unexpected error", exc_info=True)
        print(f"UNKNOWN: {type(e).__name__}: {e}")
        code = Severity.UNKNOWN.exit_code
    sys.exit(code)


if __name__ == "__main__":
    main()
