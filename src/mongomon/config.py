"""
Configuration for the collector.

Parameters come from a ``param.json`` file using the plugin parameter names
(``source``, ``pollInterval``, ``hostname``, ``port``). Every missing option
falls back to its default on its own.
"""

import json
import math
import socket
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

# plugin parameter name -> Config field
_PARAM_FIELDS = {
    "source": "source",
    "pollInterval": "poll_interval",
    "hostname": "hostname",
    "port": "port",
}

MIN_POLL_INTERVAL = 100  # Milliseconds, the scheduler floor


def _parse_number(value: str) -> int | float | str:
    """Convert a numeric string such as "5000" to a number; leave others as is."""
    try:
        number = float(value)
    except ValueError:
        return value
    if not math.isfinite(number):
        return value
    return int(number) if number.is_integer() else number


@dataclass
class Config:
    """Collector parameters."""

    source: str = field(default_factory=socket.gethostname)  # Host tag on every line
    poll_interval: int = 5000  # Milliseconds
    hostname: str = "127.0.0.1"
    port: str = "28017"

    @property
    def poll_interval_seconds(self) -> float:
        return self.poll_interval / 1000.0

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Config":
        """Load config from a parameter dictionary, ignoring unknown keys."""
        kwargs = {
            attr: data[key]
            for key, attr in _PARAM_FIELDS.items()
            if data.get(key) is not None
        }
        if "port" in kwargs:
            kwargs["port"] = str(kwargs["port"])
        if isinstance(kwargs.get("poll_interval"), str):
            kwargs["poll_interval"] = _parse_number(kwargs["poll_interval"])
        return cls(**kwargs)

    @classmethod
    def from_json(cls, path: str | Path) -> "Config":
        """Load config from a JSON parameter file."""
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"{path}: expected a JSON object")
        return cls.from_dict(data)

    def validate(self) -> list[str]:
        """
        Validate configuration parameters.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        if not self.source:
            errors.append("source must not be empty")

        if not isinstance(self.poll_interval, (int, float)) or self.poll_interval <= 0:
            errors.append("pollInterval must be a positive number of milliseconds")
        elif self.poll_interval < MIN_POLL_INTERVAL:
            errors.append(f"pollInterval must be at least {MIN_POLL_INTERVAL} milliseconds")

        if not self.hostname:
            errors.append("hostname must not be empty")

        port = str(self.port)
        if not port.isdigit() or not (0 < int(port) < 65536):
            errors.append("port must be a number between 1 and 65535")

        return errors
