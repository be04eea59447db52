"""Base classes for record writers."""

from typing import Protocol


class RecordWriter(Protocol):
    """Protocol for line-oriented calendar record writers."""

    def write(self, key: str, value: str) -> None:
        """Append one KEY:VALUE record."""
        ...

    def close(self) -> None:
        """Flush and release the underlying stream."""
        ...
