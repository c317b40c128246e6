"""
Travel API — Travel Service
=============================

What:  Data access for destinations, hotels and contact messages.
Why:   Keeps SQL and error translation out of the route handlers.
How:   Each method issues exactly one parameterized statement through the
       injected Datastore and wraps any failure in DatabaseError.
Who:   Built per request by the get_travel_service dependency.

Error Handling Strategy:
    Any exception from the datastore becomes DatabaseError carrying the
    driver's message. Errors are not retried or classified further.
"""

import logging
from typing import Any, Dict, List

from fastapi import Depends
from sqlalchemy import select, text

from travel_api.database import Datastore, get_datastore
from travel_api.exceptions import DatabaseError, driver_message
from travel_api.models.travel import ContactMessage, Hotel
from travel_api.schemas.travel import ContactRequest, ContactResponse, HotelResponse

logger = logging.getLogger(__name__)


class TravelService:
    """
    Business operations behind the /api routes.

    Stateless apart from the datastore it was constructed with.
    """

    def __init__(self, datastore: Datastore):
        self.datastore = datastore

    async def list_destinations(self) -> List[Dict[str, Any]]:
        """
        Return every destination row with all of its columns.

        Query plan:
            SELECT * FROM destinations
            No pagination, no filtering.
        """
        try:
            async with self.datastore.connect() as conn:
                result = await conn.execute(text("SELECT * FROM destinations"))
                return [dict(row) for row in result.mappings().all()]
        except Exception as e:
            logger.error("Database error listing destinations: %s", e)
            raise DatabaseError(
                message=driver_message(e),
                context={"operation": "list_destinations", "error_type": type(e).__name__},
            )

    async def list_hotels(self, destination_id: str) -> List[HotelResponse]:
        """
        Return hotels whose destination_id equals the given value.

        Args:
            destination_id: Raw path segment; not validated, bound as a parameter.

        Returns:
            Possibly empty list of {id, name, price_per_night}.
        """
        query = (
            select(Hotel.id, Hotel.name, Hotel.price_per_night)
            .where(Hotel.destination_id == destination_id)
        )
        try:
            async with self.datastore.connect() as conn:
                result = await conn.execute(query)
                rows = result.mappings().all()
        except Exception as e:
            logger.error("Database error listing hotels for %s: %s", destination_id, e)
            raise DatabaseError(
                message=driver_message(e),
                context={
                    "operation": "list_hotels",
                    "destination_id": destination_id,
                    "error_type": type(e).__name__,
                },
            )
        return [HotelResponse.model_validate(dict(row)) for row in rows]

    async def submit_contact(self, payload: ContactRequest) -> ContactResponse:
        """
        Persist a contact message and return its generated id.

        Fields are stored exactly as received; NULLs are left for the
        datastore's column constraints to accept or reject.
        """
        contact = ContactMessage(
            name=payload.name,
            email=payload.email,
            message=payload.message,
        )
        try:
            async with self.datastore.session() as session:
                session.add(contact)
                await session.flush()
                contact_id = contact.id
        except Exception as e:
            logger.error("Database error storing contact message: %s", e)
            raise DatabaseError(
                message=driver_message(e),
                context={"operation": "submit_contact", "error_type": type(e).__name__},
            )

        logger.info("Contact message %s stored", contact_id)
        return ContactResponse(message="Message sent successfully", id=contact_id)


def get_travel_service(datastore: Datastore = Depends(get_datastore)) -> TravelService:
    """FastAPI dependency building a TravelService around the app's datastore."""
    return TravelService(datastore)
