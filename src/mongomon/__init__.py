"""mongomon - MongoDB server status collector."""

__version__ = "1.0"
