"""Notifier port."""

from typing import Protocol


class Notifier(Protocol):
    """Port for pushing a short message to the user."""

    async def notify(self, title: str, body: str) -> bool:
        """Deliver a message; return whether it was accepted."""
        ...
