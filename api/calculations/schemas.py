"""
Pydantic schemas and status values for calculation endpoints.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class Status(str, Enum):
    NEW = "neu"
    IN_PROGRESS = "in Arbeit"
    DONE = "erledigt"


class ServiceLineIn(BaseModel):
    """
    One `dienstleistung` line as sent by the dashboard. Numeric fields are
    parsed leniently in `pricing`, so they are left untyped here.
    """

    beschreibung: str | None = None
    dauer_pro_einheit: Any = None
    anzahl: Any = None
    info: str | None = None
    stundensatz: Any = None


class CalculationCreateRequest(BaseModel):
    kunde_id: int | None = None
    stundensatz: Any = None
    dienstleistungen: list[ServiceLineIn] | None = None
    mitarbeiter_id: int | None = None


class StatsResponse(BaseModel):
    activeCustomers: int
    runningProjects: int
    monthlyHours: float = Field(default=0.0)
    monthlyRevenue: float = Field(default=0.0)
