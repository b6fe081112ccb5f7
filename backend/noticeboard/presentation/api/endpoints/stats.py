"""Aggregate statistics endpoint."""

from fastapi import APIRouter, Depends

from noticeboard.application.schemas import DataStatsResponse
from noticeboard.application.services import StatsService
from noticeboard.infrastructure.dependencies import get_stats_service

router = APIRouter(tags=["Stats"])


@router.get("/stats", response_model=DataStatsResponse)
async def get_stats(
    service: StatsService = Depends(get_stats_service),
) -> DataStatsResponse:
    stats = await service.get_stats()
    return DataStatsResponse.model_validate(stats)
