"""Parsing of ``jstat -gc`` and ``jstat -gccapacity`` tables."""

import logging
import re
from dataclasses import dataclass

from check_jstat.errors import ParseError
from check_jstat.models import MetricSample

log = logging.getLogger(__name__)

_LEADING_DIGITS = re.compile(r"\d+")


@dataclass(slots=True, frozen=True)
class ColumnLayout:
    """
    Zero-based column positions of the values we read from jstat.

    A new jstat table schema only needs a new layout, not new parsing code.
    """

    name: str
    eden_used: int
    old_used: int
    perm_used: int
    young_max: int
    old_max: int
    perm_max: int


# -gc:          S0C S1C S0U S1U EC EU OC OU MC MU ...   (PC PU on JDK 7)
# -gccapacity:  NGCMN NGCMX NGC S0C S1C EC OGCMN OGCMX OGC OC MCMN MCMX ...
JDK8 = ColumnLayout(
    name="jdk8",
    eden_used=5,
    old_used=7,
    perm_used=9,
    young_max=1,
    old_max=7,
    perm_max=11,
)

LAYOUTS: dict[str, ColumnLayout] = {
    "jdk7": JDK8,
    "jdk8": JDK8,
}


def last_row(text: str) -> list[str]:
    """Split the last non-blank line of a jstat table into its columns."""
    lines = [line for line in (text or "").splitlines() if line.strip()]
    if not lines:
        raise ParseError("empty jstat output")
    return lines[-1].split()


def kilobytes(columns: list[str], index: int, column: str) -> int:
    """Read the leading digits of a column as kilobytes and return bytes."""
    try:
        field = columns[index]
    except IndexError:
        raise ParseError(f"missing column {index} ({column})") from None

    match = _LEADING_DIGITS.match(field)
    if match is None:
        raise ParseError(f"column {index} ({column}) is not numeric: {field!r}")
    return int(match.group()) * 1024


def parse(gc_text: str, capacity_text: str, layout: ColumnLayout = JDK8) -> MetricSample:
    """
    Build a MetricSample from the output of ``jstat -gc`` and ``jstat -gccapacity``.

    Either argument may be the whole table or only its data line.

    Raises:
        ParseError: empty input, missing column or non-numeric field.
    """
    gc = last_row(gc_text)
    capacity = last_row(capacity_text)

    sample = MetricSample(
        eden_used=kilobytes(gc, layout.eden_used, "eden used"),
        old_used=kilobytes(gc, layout.old_used, "old used"),
        perm_used=kilobytes(gc, layout.perm_used, "perm used"),
        young_max=kilobytes(capacity, layout.young_max, "young max"),
        old_max=kilobytes(capacity, layout.old_max, "old max"),
        perm_max=kilobytes(capacity, layout.perm_max, "perm max"),
    )
    log.debug("parsed %s sample: %s", layout.name, sample)
    return sample
