"""
Travel API — Application Package
==================================

Minimal travel-booking REST backend: destinations, hotels by destination,
and a contact form, served by FastAPI over a pooled MySQL datastore.

Layers:
    routes/    HTTP concerns only (FastAPI routers)
    services/  One parameterized query per operation, error translation
    models/    SQLAlchemy ORM tables
    schemas/   Pydantic request/response contracts
    database   Datastore: async engine + bounded connection pool
"""

__version__ = "1.0.0"
