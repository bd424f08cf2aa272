"""Tests for the metric catalog."""

import re

from mongomon.catalog import CATALOG, MB, compile_catalog
from mongomon.models import MetricDefinition, MetricKind, ValueFormat

LINE = re.compile(r"^MONGO_[A-Z_]+ (-?\d+|-?\d+\.\d{6}|-?inf|nan) db1\n$")


def test_catalog_order():
    """Test the catalog keeps its declaration order."""
    assert [d.name for d in CATALOG] == [
        "BTREE_ACCESSES",
        "BTREE_HITS",
        "BTREE_MISSES",
        "BTREE_RESETS",
        "BTREE_MISS_RATIO",
        "CONNECTIONS",
        "CONNECTIONS_AVAILABLE",
        "CONNECTION_LIMIT",
        "GLOBAL_LOCK",
        "MEM_RESIDENT",
        "MEM_VIRTUAL",
        "MEM_MAPPED",
        "OPS_INSERTS",
        "OPS_QUERY",
        "OPS_UPDATE",
        "OPS_DELETE",
        "OPS_GETMORE",
        "OPS_COMMAND",
    ]


def test_catalog_kinds_and_formats():
    """Test ratio metrics are floats and memory metrics are scaled."""
    by_name = {d.name: d for d in CATALOG}

    assert by_name["CONNECTION_LIMIT"].kind is MetricKind.SPLIT
    assert by_name["CONNECTION_LIMIT"].format is ValueFormat.FLOAT
    assert by_name["GLOBAL_LOCK"].kind is MetricKind.RATIO
    assert by_name["GLOBAL_LOCK"].format is ValueFormat.FLOAT
    for name in ("MEM_RESIDENT", "MEM_VIRTUAL", "MEM_MAPPED"):
        assert by_name[name].kind is MetricKind.CUR
        assert by_name[name].params.scale == MB
    assert all(
        d.format is ValueFormat.INTEGER
        for d in CATALOG
        if d.kind in (MetricKind.DIFF, MetricKind.CUR)
    )


def test_catalog_names_unique():
    names = [d.name for d in CATALOG]
    assert len(names) == len(set(names))


def test_compile_catalog_produces_one_function_per_metric(status_factory):
    """Test every compiled function emits a well-formed line in order."""
    functions = compile_catalog("db1")
    previous = status_factory()
    current = status_factory(accesses=150, ops=25, connections=4, available=6)

    lines = [fn(current, previous) for fn in functions]

    assert len(lines) == len(CATALOG)
    for definition, line in zip(CATALOG, lines):
        assert line.startswith(f"MONGO_{definition.name} ")
        assert LINE.match(line), line
    assert lines[0] == "MONGO_BTREE_ACCESSES 50 db1\n"
    assert lines[7] == "MONGO_CONNECTION_LIMIT 0.400000 db1\n"
    assert lines[9] == f"MONGO_MEM_RESIDENT {64 * MB} db1\n"
    assert lines[-1] == "MONGO_OPS_COMMAND 15 db1\n"


def test_compile_custom_definitions():
    """Test compile_catalog accepts an alternative definition list."""
    functions = compile_catalog(
        "h", [MetricDefinition.cur("UPTIME", ValueFormat.INTEGER, ("uptime",))]
    )
    assert len(functions) == 1
    assert functions[0]({"uptime": 12}) == "MONGO_UPTIME 12 h\n"
