"""
Travel API — Pydantic Request/Response Schemas
================================================

What:  Pydantic models defining the JSON contract of the travel endpoints.
How:   FastAPI uses these to parse the contact body, serialize hotel rows
       and generate the OpenAPI document.
"""

from decimal import Decimal
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class ContactRequest(BaseModel):
    """
    Body of POST /api/contact.

    Every field is optional and unconstrained: values are handed to the
    datastore as-is, and missing ones arrive there as NULL.
    """
    name: Optional[Any] = Field(default=None, description="Sender name")
    email: Optional[Any] = Field(default=None, description="Sender email address")
    message: Optional[Any] = Field(default=None, description="Message body")


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class HotelResponse(BaseModel):
    """One hotel row as returned by GET /api/hotels/{destination_id}."""
    id: int
    name: Optional[str] = None
    price_per_night: Optional[Decimal] = Field(
        default=None,
        description="Nightly price; DECIMAL in MySQL, exact decimal string in JSON",
    )

    model_config = {"from_attributes": True}


class ContactResponse(BaseModel):
    message: str = Field(default="Message sent successfully")
    id: int = Field(description="Generated id of the stored contact message")


class HealthResponse(BaseModel):
    """Liveness only; does not touch the datastore."""
    status: str = Field(default="OK")
    message: str = Field(default="Server is running")


class DbTestResponse(BaseModel):
    connection: str = Field(description="'Success' or 'Failed'")
    test: Optional[Dict[str, Any]] = Field(default=None, description="Row from SELECT 1 AS test")
    env: Optional[str] = Field(default=None, description="Runtime environment name")


class ErrorResponse(BaseModel):
    """Error body for every 500 raised by the travel endpoints."""
    error: str = Field(description="Underlying error message")
