"""FastAPI endpoints for catalogue curation.

This module exposes the curation engine over HTTP:
- Full analysis of a single catalogue
- Targeted auto-curation recommendations
- Portfolio-wide analysis for one owner

Typed application errors propagate to the application's exception
handler, which maps them to status codes.
"""

from typing import List, Optional
from fastapi import APIRouter, Body, Depends, Path

from curator.api.dependencies import get_curation_service
from curator.core.logging import get_logger
from curator.models.domain import (
    AutoCurateOptions,
    CurationAnalysis,
    PortfolioAnalysis,
    Recommendation
)
from curator.services.curation.service import CurationService

# Initialize router and logger
router = APIRouter()
logger = get_logger(__name__)

@router.get("/catalogues/{catalogue_id}/analysis", response_model=CurationAnalysis)
async def analyze_catalogue(
    catalogue_id: str = Path(..., description="The ID of the catalogue to analyze"),
    service: CurationService = Depends(get_curation_service)
):
    """Score a catalogue and list prioritized recommendations."""
    logger.info("Catalogue analysis requested", catalogue_id=catalogue_id)
    return await service.analyze_catalogue(catalogue_id)

@router.post("/catalogues/{catalogue_id}/auto-curate", response_model=List[Recommendation])
async def auto_curate(
    catalogue_id: str = Path(..., description="The ID of the catalogue to curate"),
    options: Optional[AutoCurateOptions] = Body(None),
    service: CurationService = Depends(get_curation_service)
):
    """Recommendations restricted to the requested families."""
    logger.info(
        "Auto-curation requested",
        catalogue_id=catalogue_id,
        options=options.model_dump() if options else None
    )
    return await service.auto_curate(catalogue_id, options)

@router.get("/owners/{owner_id}/analysis", response_model=PortfolioAnalysis)
async def analyze_portfolio(
    owner_id: str = Path(..., description="The ID of the catalogue owner"),
    service: CurationService = Depends(get_curation_service)
):
    """Analyze every catalogue belonging to one owner."""
    logger.info("Portfolio analysis requested", owner_id=owner_id)
    return await service.analyze_portfolio(owner_id)
