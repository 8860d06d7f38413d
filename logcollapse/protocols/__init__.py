"""
Protocols (interfaces) for logcollapse components.

This module defines abstract contracts that implementations must follow.
"""

from abc import ABC, abstractmethod

__all__ = [
    'OutputSinkProtocol',
]


class OutputSinkProtocol(ABC):
    """Protocol for the append-only destination of collapsed events."""

    @abstractmethod
    def write(self, data: str) -> None:
        """
        Append text to the sink.

        Args:
            data: One or more complete lines, terminators included
        """
        pass

    @abstractmethod
    def flush(self) -> None:
        """Push buffered data to the underlying storage."""
        pass

    @abstractmethod
    def close(self) -> None:
        """Flush and release the underlying storage."""
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False
