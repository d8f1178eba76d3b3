"""
Calculation API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, status

from . import schemas, service

router = APIRouter(prefix="/kalkulationen")


@router.get("/stats")
async def get_stats() -> schemas.StatsResponse:
    return await service.stats()


@router.get("")
async def list_calculations() -> list[dict]:
    return await service.list_calculations()


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_calculation(request: schemas.CalculationCreateRequest) -> dict:
    return await service.create_calculation(request)
