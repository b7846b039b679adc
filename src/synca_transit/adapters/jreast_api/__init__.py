"""JR East train information adapter."""

from synca_transit.adapters.jreast_api.jreast_train_information import (
    JrEastTrainInformationSource,
)

__all__ = ["JrEastTrainInformationSource"]
