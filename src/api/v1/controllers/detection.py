import json
from typing import Any

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse
from starlette.requests import ClientDisconnect

from src.api.v1.schemas.detection import (
    DetectionRequest,
    DetectionResponse,
    ErrorResponse,
    HealthResponse,
)
from src.core.exceptions import InvalidRequestBodyError
from src.dtos.detection_dto import HealthStatus
from src.services.detection_service import DetectionService

router = APIRouter(route_class=DishkaRoute, tags=["Detection"])

# Path served to existing web clients
legacy_router = APIRouter(
    route_class=DishkaRoute,
    prefix="/api/detect-text",
    tags=["Detection"],
)

_DETECT_RESPONSES = {
    status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
    status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
    status.HTTP_502_BAD_GATEWAY: {"model": ErrorResponse},
    status.HTTP_503_SERVICE_UNAVAILABLE: {"model": ErrorResponse},
}
_DETECT_BODY = {
    "requestBody": {
        "required": True,
        "content": {"application/json": {"schema": DetectionRequest.model_json_schema()}},
    }
}


async def _read_payload(request: Request) -> dict[str, Any]:
    """Parse the body as a JSON object; field checks are left to the service."""
    try:
        payload = json.loads(await request.body())
    except ClientDisconnect as exc:
        raise InvalidRequestBodyError("Client disconnected") from exc
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise InvalidRequestBodyError("Invalid JSON body") from exc

    if not isinstance(payload, dict):
        raise InvalidRequestBodyError("JSON body must be an object")
    return payload


@router.post(
    "/detect",
    response_model=DetectionResponse,
    responses=_DETECT_RESPONSES,
    openapi_extra=_DETECT_BODY,
)
@legacy_router.post(
    "",
    response_model=DetectionResponse,
    responses=_DETECT_RESPONSES,
    openapi_extra=_DETECT_BODY,
)
async def detect_text(
    request: Request,
    service: FromDishka[DetectionService],
) -> DetectionResponse:
    """Detect whether the provided text is human-written or AI-generated."""
    payload = await _read_payload(request)
    result = await service.detect(payload)
    return DetectionResponse.from_dto(result)


@router.get(
    "/health",
    response_model=HealthResponse,
    response_model_exclude_none=True,
    responses={status.HTTP_503_SERVICE_UNAVAILABLE: {"model": HealthResponse}},
)
@legacy_router.get(
    "",
    response_model=HealthResponse,
    response_model_exclude_none=True,
    responses={status.HTTP_503_SERVICE_UNAVAILABLE: {"model": HealthResponse}},
)
async def health_check(service: FromDishka[DetectionService]) -> JSONResponse:
    """Report whether the external classifier is reachable."""
    report = await service.check_health()
    status_code = (
        status.HTTP_200_OK
        if report.status is HealthStatus.HEALTHY
        else status.HTTP_503_SERVICE_UNAVAILABLE
    )
    return JSONResponse(
        status_code=status_code,
        content=HealthResponse.from_dto(report).model_dump(by_alias=True, exclude_none=True),
    )
