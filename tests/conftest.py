"""Shared fixtures for mongomon tests."""

import logging

import pytest


def make_status(
    accesses=100,
    hits=90,
    misses=10,
    resets=0,
    miss_ratio=0,
    connections=3,
    available=7,
    lock_time=5,
    total_time=100,
    resident=64,
    virtual=512,
    mapped=128,
    ops=10,
):
    """Build a serverStatus document shaped like the MongoDB REST output."""
    return {
        "host": "db1",
        "indexCounters": {
            "accesses": accesses,
            "hits": hits,
            "misses": misses,
            "resets": resets,
            "missRatio": miss_ratio,
        },
        "connections": {"current": connections, "available": available},
        "globalLock": {"lockTime": lock_time, "totalTime": total_time},
        "mem": {"resident": resident, "virtual": virtual, "mapped": mapped},
        "opcounters": {
            "insert": ops,
            "query": ops,
            "update": ops,
            "delete": ops,
            "getmore": ops,
            "command": ops,
        },
    }


@pytest.fixture
def status_factory():
    return make_status


@pytest.fixture(autouse=True)
def reset_mongomon_logger():
    """Undo handlers installed by configure_logging between tests."""
    logger = logging.getLogger("mongomon")
    handlers = logger.handlers[:]
    level = logger.level
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)
