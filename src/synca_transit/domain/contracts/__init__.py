"""Contracts shared between application services and adapters."""

from synca_transit.domain.contracts.poller import PollerProtocol

__all__ = ["PollerProtocol"]
