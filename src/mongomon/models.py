"""Data models for mongomon."""

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

# One decoded ``serverStatus`` document. Treated as read-only everywhere.
Snapshot = Mapping[str, Any]

KeyPath = tuple[str, ...]


class MetricKind(Enum):
    """How a metric combines the values it reads."""

    DIFF = "diff"
    CUR = "cur"
    RATIO = "ratio"
    SPLIT = "split"


class ValueFormat(Enum):
    """Numeric rendering of a metric value."""

    INTEGER = "%d"
    FLOAT = "%f"


@dataclass(slots=True, frozen=True)
class SinglePath:
    """Parameters of a metric reading one value."""

    path: KeyPath
    scale: float = 1


@dataclass(slots=True, frozen=True)
class PathPair:
    """Parameters of a metric combining two values of the current snapshot."""

    first: KeyPath
    second: KeyPath
    scale: float = 1


_PARAMS_BY_KIND: dict[MetricKind, type] = {
    MetricKind.DIFF: SinglePath,
    MetricKind.CUR: SinglePath,
    MetricKind.RATIO: PathPair,
    MetricKind.SPLIT: PathPair,
}


@dataclass(slots=True, frozen=True)
class MetricDefinition:
    """
    Immutable declaration of one catalog metric.

    The kind decides which parameter payload is accepted: ``SinglePath`` for
    diff and cur, ``PathPair`` for ratio and split.
    """

    name: str
    kind: MetricKind
    format: ValueFormat
    params: SinglePath | PathPair

    def __post_init__(self) -> None:
        expected = _PARAMS_BY_KIND[self.kind]
        if not isinstance(self.params, expected):
            raise ValueError(
                f"{self.name}: {self.kind.value} metrics take {expected.__name__}, "
                f"got {type(self.params).__name__}"
            )
        paths = (
            (self.params.path,)
            if isinstance(self.params, SinglePath)
            else (self.params.first, self.params.second)
        )
        if any(not path for path in paths):
            raise ValueError(f"{self.name}: key paths must not be empty")

    @classmethod
    def diff(
        cls, name: str, fmt: ValueFormat, path: KeyPath, scale: float = 1
    ) -> "MetricDefinition":
        return cls(name, MetricKind.DIFF, fmt, SinglePath(path, scale))

    @classmethod
    def cur(
        cls, name: str, fmt: ValueFormat, path: KeyPath, scale: float = 1
    ) -> "MetricDefinition":
        return cls(name, MetricKind.CUR, fmt, SinglePath(path, scale))

    @classmethod
    def ratio(
        cls, name: str, fmt: ValueFormat, first: KeyPath, second: KeyPath, scale: float = 1
    ) -> "MetricDefinition":
        return cls(name, MetricKind.RATIO, fmt, PathPair(first, second, scale))

    @classmethod
    def split(
        cls, name: str, fmt: ValueFormat, first: KeyPath, second: KeyPath, scale: float = 1
    ) -> "MetricDefinition":
        return cls(name, MetricKind.SPLIT, fmt, PathPair(first, second, scale))


@dataclass(slots=True, frozen=True)
class PollState:
    """The most recent successfully fetched snapshot, if any."""

    previous: Snapshot | None = None

    @property
    def is_primed(self) -> bool:
        """True once a first snapshot has been stored."""
        return self.previous is not None

    def advance(self, snapshot: Snapshot) -> "PollState":
        """Return the state that follows a successful poll of ``snapshot``."""
        return PollState(snapshot)
