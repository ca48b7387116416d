"""Realistic jstat tables and fake collaborators shared by the tests."""

from check_jstat.errors import NotJavaProcess, ProcessNotFound, StatisticsUnavailable
from check_jstat.validator import ProcessOutcome, ProcessValidator

GC_HEADER = (
    " S0C    S1C    S0U    S1U      EC       EU        OC         OU       MC     MU"
    "    CCSC   CCSU   YGC     YGCT    FGC    FGCT     GCT   "
)
CAPACITY_HEADER = (
    " NGCMN    NGCMX     NGC     S0C   S1C       EC      OGCMN      OGCMX       OGC"
    "         OC       MCMN     MCMX      MC     CCSMN    CCSMX     CCSC    YGC    FGC "
)


def make_gc_table(eden_used_kb, old_used_kb, perm_used_kb) -> str:
    """A ``jstat -gc`` table with the given EU, OU and MU columns."""
    row = (
        f"512.0  512.0   0.0    0.0    4096.0   {eden_used_kb}    10240.0     {old_used_kb}"
        f"   4480.0 {perm_used_kb}  384.0  76.4        0    0.000   0      0.000    0.000"
    )
    return f"{GC_HEADER}\n{row}\n"


def make_capacity_table(young_max_kb, old_max_kb, perm_max_kb) -> str:
    """A ``jstat -gccapacity`` table with the given NGCMX, OGCMX and MCMX columns."""
    row = (
        f" 5120.0  {young_max_kb}   5120.0  512.0  512.0   4096.0    10240.0   {old_max_kb}"
        f"    10240.0    10240.0      0.0 {perm_max_kb}   4480.0      0.0 1048576.0    384.0      0     0"
    )
    return f"{CAPACITY_HEADER}\n{row}\n"


class FakeSource:
    """Statistics source returning canned tables per pid."""

    def __init__(self, tables=None, jps_output="", fail_gc=(), fail_capacity=()):
        self.tables = tables or {}
        self.jps_output = jps_output
        self.fail_gc = set(fail_gc)
        self.fail_capacity = set(fail_capacity)
        self.jps_calls = []

    def gc(self, pid):
        if pid in self.fail_gc:
            raise StatisticsUnavailable("jstat printed nothing")
        return self.tables[pid][0]

    def gccapacity(self, pid):
        if pid in self.fail_capacity:
            raise StatisticsUnavailable("jstat printed nothing")
        return self.tables[pid][1]

    def jps(self, verbose=False):
        self.jps_calls.append(verbose)
        if self.jps_output is None:
            raise StatisticsUnavailable("jps not found on PATH")
        return self.jps_output


class FakeValidator(ProcessValidator):
    """Validator with fixed sets of missing and non-java pids."""

    def __init__(self, missing=(), not_java=()):
        self.missing = set(missing)
        self.not_java = set(not_java)

    def validate(self, pid):
        if pid in self.missing:
            raise ProcessNotFound(pid)
        if pid in self.not_java:
            raise NotJavaProcess(pid, "python")
        return ProcessOutcome(pid=pid, alive=True, is_java=True, name="java")
