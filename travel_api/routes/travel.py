"""
Travel API — Travel Route Handlers
====================================

What:  GET /api/destinations, GET /api/hotels/{destination_id}, POST /api/contact.
How:   Thin handlers; each delegates to TravelService, which issues one query.

Failures surface as DatabaseError and are turned into HTTP 500
{"error": "..."} by the global handler in main.py.
"""

import json
import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, Request
from fastapi.exceptions import RequestValidationError

from travel_api.schemas.travel import (
    ContactRequest,
    ContactResponse,
    ErrorResponse,
    HotelResponse,
)
from travel_api.services.travel_service import TravelService, get_travel_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Travel"])


@router.get(
    "/destinations",
    response_model=List[Dict[str, Any]],
    responses={500: {"description": "Datastore error", "model": ErrorResponse}},
    summary="List all destinations",
)
async def list_destinations(
    service: TravelService = Depends(get_travel_service),
) -> List[Dict[str, Any]]:
    return await service.list_destinations()


@router.get(
    "/hotels/{destination_id}",
    response_model=List[HotelResponse],
    responses={500: {"description": "Datastore error", "model": ErrorResponse}},
    summary="List hotels at a destination",
    description="Returns id, name and price_per_night for every hotel at the destination.",
)
async def list_hotels(
    destination_id: str,
    service: TravelService = Depends(get_travel_service),
) -> List[HotelResponse]:
    """
    Args:
        destination_id: Path segment, passed to the query unvalidated.
                        Unknown ids yield an empty array, not a 404.
    """
    return await service.list_hotels(destination_id)


def _is_json_media_type(content_type: str) -> bool:
    media_type = content_type.split(";", 1)[0].strip().lower()
    return media_type == "application/json" or (
        media_type.startswith("application/") and media_type.endswith("+json")
    )


async def read_contact_payload(request: Request) -> ContactRequest:
    """
    Parse the contact body the way a JSON body parser would.

    - No body, or a non-JSON content type (e.g. a form post): empty payload
    - JSON that is not an object: empty payload
    - Malformed JSON: 422, the only rejection made before the datastore

    Fields are never checked here; missing ones reach the datastore as NULL.
    """
    body = await request.body()
    if not body or not _is_json_media_type(request.headers.get("content-type", "")):
        return ContactRequest()

    try:
        data = json.loads(body)
    except ValueError as e:
        raise RequestValidationError(
            [{
                "type": "json_invalid",
                "loc": ("body",),
                "msg": "JSON decode error",
                "input": {},
                "ctx": {"error": str(e)},
            }]
        )

    if not isinstance(data, dict):
        return ContactRequest()
    return ContactRequest.model_validate(data)


@router.post(
    "/contact",
    response_model=ContactResponse,
    responses={500: {"description": "Datastore error", "model": ErrorResponse}},
    summary="Submit a contact message",
    openapi_extra={
        "requestBody": {
            "required": False,
            "content": {"application/json": {"schema": ContactRequest.model_json_schema()}},
        }
    },
)
async def submit_contact(
    payload: ContactRequest = Depends(read_contact_payload),
    service: TravelService = Depends(get_travel_service),
) -> ContactResponse:
    return await service.submit_contact(payload)
