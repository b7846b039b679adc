"""ODPT API adapter."""

from synca_transit.adapters.odpt_api.http_client import OdptHttpClient
from synca_transit.adapters.odpt_api.odpt_railway_catalog import OdptRailwayCatalog
from synca_transit.adapters.odpt_api.odpt_train_information import OdptTrainInformationSource

__all__ = ["OdptHttpClient", "OdptRailwayCatalog", "OdptTrainInformationSource"]
