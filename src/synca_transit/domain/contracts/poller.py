"""Protocol for background pollers."""

from typing import Protocol


class PollerProtocol(Protocol):
    """Protocol for a background task that repeats work on an interval."""

    async def start(self) -> None:
        """Start the poller."""
        ...

    async def stop(self) -> None:
        """Stop the poller."""
        ...
