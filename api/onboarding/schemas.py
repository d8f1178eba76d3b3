"""
Onboarding API schemas.
"""

from __future__ import annotations

from datetime import date
from typing import Any

from pydantic import BaseModel


class OnboardingCreateRequest(BaseModel):
    kunde_id: int | None = None
    # Free-form questionnaire (network, users, hardware, ...). Never inspected.
    infrastructure_data: dict[str, Any] | None = None
    mitarbeiter_id: int | None = None


class OnboardingCreated(BaseModel):
    message: str
    onboarding_id: int


class OnboardingRecord(BaseModel):
    onboarding_id: int
    datum: date | None = None
    status: str | None = None
    mitarbeiter_id: int | None = None
    kunde_id: int | None = None
    infrastructure_data: Any = None
