from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from app.core.config import Settings, get_settings
from app.tours.service import TourSearchService
from app.tours.validation import ValidationError, validate_search_request

logger = logging.getLogger(__name__)

router = APIRouter(tags=["tours"])


def get_search_service() -> TourSearchService:  # pragma: no cover - переопределяется в main
    raise RuntimeError("Search service dependency is not configured")


class ErrorResponse(BaseModel):
    error: str
    message: str
    details: dict[str, Any] | None = None


class HealthResponse(BaseModel):
    status: str
    timestamp: str
    service: str


def _error(status_code: int, error: str, message: str, details: dict[str, Any] | None = None) -> JSONResponse:
    body = ErrorResponse(error=error, message=message, details=details)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


async def _read_body(request: Request) -> Any:
    raw = await request.body()
    if not raw.strip():
        return None
    try:
        return json.loads(raw)
    except ValueError:
        # битый JSON равносилен отсутствию тела
        return None


@router.get("/health", response_model=HealthResponse)
async def health(settings: Settings = Depends(get_settings)) -> HealthResponse:
    return HealthResponse(
        status="ok",
        timestamp=datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
        service=settings.service_name,
    )


@router.post("/tours/search")
async def search_tours(
    request: Request,
    service: TourSearchService = Depends(get_search_service),
    settings: Settings = Depends(get_settings),
) -> JSONResponse:
    try:
        payload = await _read_body(request)
        criteria = validate_search_request(payload, today=settings.today())
        result = await service.search(criteria)
    except ValidationError as exc:
        logger.info("Tour search rejected: %s", exc.message)
        return _error(status.HTTP_400_BAD_REQUEST, "ValidationError", exc.message)
    except Exception as exc:
        logger.exception("Tour search failed")
        details = None
        if settings.include_error_details:
            details = {"type": type(exc).__name__, "repr": repr(exc)}
        return _error(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "InternalServerError",
            str(exc) or "An unexpected error occurred",
            details,
        )

    return JSONResponse(status_code=status.HTTP_200_OK, content=result.to_dict())


__all__ = ["router", "get_search_service", "ErrorResponse", "HealthResponse"]
