"""
Onboarding business logic.
"""

from __future__ import annotations

import logging

from fastapi import HTTPException, status

from core import settings
from core.errors import store_errors

from . import repository, schemas

logger = logging.getLogger(__name__)


async def create_onboarding(payload: schemas.OnboardingCreateRequest) -> schemas.OnboardingCreated:
    # An empty object is a valid (if unfilled) questionnaire.
    if not payload.kunde_id or payload.infrastructure_data is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="kunde_id und infrastructure_data sind erforderlich",
        )

    with store_errors("Fehler beim Speichern des Onboardings", with_cause=True):
        onboarding_id = await repository.insert_onboarding(
            kunde_id=payload.kunde_id,
            mitarbeiter_id=payload.mitarbeiter_id or settings.default_employee_id(),
            infrastructure_data=payload.infrastructure_data,
        )

    logger.info("onboarding_created onboarding_id=%s kunde_id=%s", onboarding_id, payload.kunde_id)
    return schemas.OnboardingCreated(message="Onboarding gespeichert", onboarding_id=onboarding_id)


async def get_onboarding(onboarding_id: int) -> schemas.OnboardingRecord:
    with store_errors("Fehler beim Abrufen"):
        row = await repository.get_onboarding(onboarding_id)
    if row is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Nicht gefunden")
    return schemas.OnboardingRecord(**row)
