"""The fixed metric catalog reported for every poll."""

from collections.abc import Iterable

from mongomon.metrics import MetricFunction, build
from mongomon.models import MetricDefinition, ValueFormat

MB = 1024 * 1024

_INT = ValueFormat.INTEGER
_FLOAT = ValueFormat.FLOAT

CATALOG: tuple[MetricDefinition, ...] = (
    MetricDefinition.diff("BTREE_ACCESSES", _INT, ("indexCounters", "accesses")),
    MetricDefinition.diff("BTREE_HITS", _INT, ("indexCounters", "hits")),
    MetricDefinition.diff("BTREE_MISSES", _INT, ("indexCounters", "misses")),
    MetricDefinition.diff("BTREE_RESETS", _INT, ("indexCounters", "resets")),
    MetricDefinition.diff("BTREE_MISS_RATIO", _INT, ("indexCounters", "missRatio")),
    MetricDefinition.cur("CONNECTIONS", _INT, ("connections", "current")),
    MetricDefinition.cur("CONNECTIONS_AVAILABLE", _INT, ("connections", "available")),
    MetricDefinition.split(
        "CONNECTION_LIMIT", _FLOAT, ("connections", "current"), ("connections", "available")
    ),
    MetricDefinition.ratio(
        "GLOBAL_LOCK", _FLOAT, ("globalLock", "lockTime"), ("globalLock", "totalTime")
    ),
    # mem.* is reported in megabytes
    MetricDefinition.cur("MEM_RESIDENT", _INT, ("mem", "resident"), MB),
    MetricDefinition.cur("MEM_VIRTUAL", _INT, ("mem", "virtual"), MB),
    MetricDefinition.cur("MEM_MAPPED", _INT, ("mem", "mapped"), MB),
    MetricDefinition.diff("OPS_INSERTS", _INT, ("opcounters", "insert")),
    MetricDefinition.diff("OPS_QUERY", _INT, ("opcounters", "query")),
    MetricDefinition.diff("OPS_UPDATE", _INT, ("opcounters", "update")),
    MetricDefinition.diff("OPS_DELETE", _INT, ("opcounters", "delete")),
    MetricDefinition.diff("OPS_GETMORE", _INT, ("opcounters", "getmore")),
    MetricDefinition.diff("OPS_COMMAND", _INT, ("opcounters", "command")),
)


def compile_catalog(
    source: str, definitions: Iterable[MetricDefinition] = CATALOG
) -> tuple[MetricFunction, ...]:
    """Build one metric function per definition, keeping declaration order."""
    return tuple(build(definition, source) for definition in definitions)
