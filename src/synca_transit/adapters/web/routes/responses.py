"""JSON envelope responses shared by the API routes."""

from datetime import UTC, datetime
from typing import Any

from starlette.responses import JSONResponse

from synca_transit.adapters.transit_api.schemas import ApiEnvelope


def success_response(
    data: Any, count: int | None = None, with_timestamp: bool = False
) -> JSONResponse:
    """200 response carrying already-serialized data."""
    envelope = ApiEnvelope[Any](
        success=True,
        data=data,
        count=count,
        updated_at=datetime.now(UTC) if with_timestamp else None,
    )
    return JSONResponse(envelope.model_dump(by_alias=True, mode="json", exclude_none=True))


def error_response(message: str, status_code: int) -> JSONResponse:
    envelope = ApiEnvelope[Any](success=False, error=message)
    return JSONResponse(
        envelope.model_dump(by_alias=True, mode="json", exclude_none=True),
        status_code=status_code,
    )
