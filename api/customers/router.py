"""
Customer API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, status

from . import schemas, service

router = APIRouter(prefix="/customers")


@router.get("")
async def list_customers() -> list[dict]:
    return await service.list_customers()


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_customer(request: schemas.CustomerCreateRequest) -> dict:
    return await service.create_customer(request)
