"""Segments Route: read-only catalog of platform segments covered by the scrapers."""

from fastapi import APIRouter

from results_service.core.domain_types import SegmentType
from results_service.schemas.marketplace_item import SegmentResponse

router = APIRouter(prefix="/api/v1/segments", tags=["segments"])


@router.get("", response_model=list[SegmentResponse])
async def list_segments():
    return [
        SegmentResponse(
            id=segment.value,
            name=segment.name,
            description=segment.description,
            supports_real_time_monitoring=segment.supports_real_time_monitoring,
        )
        for segment in SegmentType
    ]
