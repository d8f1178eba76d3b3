"""
Onboarding API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, status

from . import schemas, service

router = APIRouter(prefix="/onboarding")


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_onboarding(request: schemas.OnboardingCreateRequest) -> schemas.OnboardingCreated:
    return await service.create_onboarding(request)


@router.get("/{onboarding_id}")
async def get_onboarding(onboarding_id: int) -> schemas.OnboardingRecord:
    """
    Single onboarding record including the raw infrastructure document.
    """
    return await service.get_onboarding(onboarding_id)
