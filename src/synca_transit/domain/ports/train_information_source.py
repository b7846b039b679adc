"""Train information source port."""

from typing import Protocol

from synca_transit.domain.models.train_information import TrainInformation


class TrainInformationSource(Protocol):
    """Port for a feed of live train information reports."""

    async def fetch_train_information(self) -> list[TrainInformation]:
        """Return the reports currently published; lines without issues may be absent."""
        ...
