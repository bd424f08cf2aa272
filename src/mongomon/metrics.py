"""Metric derivation: key path lookup and metric function construction."""

import math
from collections.abc import Callable, Mapping
from typing import Any

from mongomon.errors import PathLookupError
from mongomon.models import (
    KeyPath,
    MetricDefinition,
    MetricKind,
    PathPair,
    SinglePath,
    Snapshot,
    ValueFormat,
)

# (current, previous) -> one output line
MetricFunction = Callable[[Snapshot, Snapshot | None], str]

LINE_PREFIX = "MONGO_"


def lookup(snapshot: Snapshot, path: KeyPath) -> Any:
    """
    Resolve ``path`` inside ``snapshot`` by indexing one key at a time.

    Raises:
        PathLookupError: A key is missing or a non-terminal value is not a mapping.
        ValueError: ``path`` is empty.
    """
    if not path:
        raise ValueError("key path must not be empty")

    value: Any = snapshot
    for depth, key in enumerate(path):
        if not isinstance(value, Mapping) or key not in value:
            raise PathLookupError(path, depth)
        value = value[key]
    return value


def divide(numerator: float, denominator: float) -> float:
    """IEEE-754 division: a zero denominator yields inf, -inf or nan."""
    if denominator != 0:
        return numerator / denominator
    if numerator == 0 or math.isnan(numerator):
        return math.nan
    return math.copysign(math.inf, numerator) * math.copysign(1.0, denominator)


def format_value(value: float, fmt: ValueFormat) -> str:
    """Render a metric value; non-finite integers fall back to ``%f``."""
    if fmt is ValueFormat.INTEGER and isinstance(value, float) and not math.isfinite(value):
        return ValueFormat.FLOAT.value % value
    return fmt.value % value


def _diff(params: SinglePath) -> Callable[[Snapshot, Snapshot | None], float]:
    """Scaled change of one counter between the previous and current snapshot."""
    path, scale = params.path, params.scale

    def compute(current: Snapshot, previous: Snapshot | None) -> float:
        if previous is None:
            raise ValueError("diff metric requires a previous snapshot")
        # Counter resets produce negative deltas; they are reported as is.
        return scale * (lookup(current, path) - lookup(previous, path))

    return compute


def _cur(params: SinglePath) -> Callable[[Snapshot, Snapshot | None], float]:
    """Scaled value read from the current snapshot."""
    path, scale = params.path, params.scale

    def compute(current: Snapshot, previous: Snapshot | None) -> float:
        return scale * lookup(current, path)

    return compute


def _ratio(params: PathPair) -> Callable[[Snapshot, Snapshot | None], float]:
    """Scaled quotient of two current values."""
    first, second, scale = params.first, params.second, params.scale

    def compute(current: Snapshot, previous: Snapshot | None) -> float:
        return divide(scale * lookup(current, first), lookup(current, second))

    return compute


def _split(params: PathPair) -> Callable[[Snapshot, Snapshot | None], float]:
    """Scaled share of the first value in the sum of both."""
    first, second, scale = params.first, params.second, params.scale

    def compute(current: Snapshot, previous: Snapshot | None) -> float:
        a = lookup(current, first)
        return divide(scale * a, a + lookup(current, second))

    return compute


_BUILDERS: dict[MetricKind, Callable[[Any], Callable[[Snapshot, Snapshot | None], float]]] = {
    MetricKind.DIFF: _diff,
    MetricKind.CUR: _cur,
    MetricKind.RATIO: _ratio,
    MetricKind.SPLIT: _split,
}


def compute_value(definition: MetricDefinition) -> Callable[[Snapshot, Snapshot | None], float]:
    """Return the bare numeric combinator for ``definition``."""
    return _BUILDERS[definition.kind](definition.params)


def build(definition: MetricDefinition, source: str) -> MetricFunction:
    """
    Build the function that turns snapshots into the output line of one metric.

    Args:
        definition: The metric declaration.
        source: Host tag appended to every line.

    Returns:
        A callable ``(current, previous=None) -> str`` producing
        ``"MONGO_<NAME> <VALUE> <SOURCE>\\n"``.
    """
    compute = compute_value(definition)
    name, fmt = definition.name, definition.format

    def metric(current: Snapshot, previous: Snapshot | None = None) -> str:
        value = format_value(compute(current, previous), fmt)
        return f"{LINE_PREFIX}{name} {value} {source}\n"

    metric.__name__ = f"metric_{name.lower()}"
    return metric
