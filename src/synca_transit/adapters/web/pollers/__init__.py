"""Background pollers."""

from synca_transit.adapters.web.pollers.delay_alert_poller import DelayAlertPoller

__all__ = ["DelayAlertPoller"]
