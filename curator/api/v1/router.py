"""Router configuration for the catalogue curation service.

This module organizes and configures all API routes, combining endpoints from
different modules into a unified API structure.
"""

from fastapi import APIRouter

# Import endpoint routers
from curator.api.v1.endpoints import curation

# Create main router
api_router = APIRouter()

# Include all endpoint routers
api_router.include_router(curation.router, prefix="/curation", tags=["curation"])
