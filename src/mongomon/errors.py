"""Exceptions raised by mongomon."""


class CollectorError(Exception):
    """Base class for collector failures."""


class TransportError(CollectorError):
    """The status endpoint could not be reached or answered with an error."""


class DecodeError(CollectorError):
    """The status response body was not a usable JSON document."""


class PathLookupError(CollectorError, LookupError):
    """A key path does not match the shape of a snapshot."""

    def __init__(self, path: tuple[str, ...], depth: int) -> None:
        self.path = path
        self.depth = depth
        shown = ".".join(path[: depth + 1])
        super().__init__(f"no value at {shown!r} (path {'.'.join(path)!r})")
