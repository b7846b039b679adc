"""Scheduler-triggered endpoints."""

from __future__ import annotations

import hmac
import logging
from typing import TYPE_CHECKING

from starlette.routing import Route

from synca_transit.adapters.web.routes.responses import error_response, success_response

if TYPE_CHECKING:
    from starlette.requests import Request
    from starlette.responses import Response

logger = logging.getLogger(__name__)


def is_authorized(request: Request, secret: str | None) -> bool:
    """Without a configured secret everyone is allowed; otherwise a matching Bearer token."""
    if not secret:
        return True
    provided = request.headers.get("Authorization", "")
    return hmac.compare_digest(provided, f"Bearer {secret}")


async def train_delay(request: Request) -> Response:
    """Run one delay alert check."""
    if not is_authorized(request, request.app.state.config.cron_secret):
        logger.warning("Unauthorized call to the train delay cron endpoint")
        return error_response("Unauthorized", 401)

    alert_service = request.app.state.services.alert_service
    if alert_service is None:
        return error_response("Delay alerts are not configured", 503)

    try:
        result = await alert_service.check()
    except Exception as e:
        logger.error(f"Delay alert check failed: {e}")
        return error_response("Delay alert check failed", 500)

    return success_response(
        {
            "disruptedLines": result.disrupted_lines,
            "notifiedLines": result.notified_lines,
            "sent": result.sent,
        }
    )


routes = [Route("/api/cron/train-delay", train_delay, methods=["GET", "POST"])]
