"""
Calculation business logic: dashboard stats, recent list and creation.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from fastapi import HTTPException, status

from core import settings
from core.errors import store_errors

from . import pricing, repository, schemas

logger = logging.getLogger(__name__)

_FLOAT_FIELDS = ("stundensatz", "gesamtzeit", "gesamtpreis")


def _with_float_fields(row: dict[str, Any]) -> dict[str, Any]:
    out = dict(row)
    for name in _FLOAT_FIELDS:
        if out.get(name) is not None:
            out[name] = float(out[name])
    return out


async def stats() -> schemas.StatsResponse:
    with store_errors("Fehler beim Abrufen der Statistiken"):
        # Wait for all four; any failure fails the whole result.
        results = await asyncio.gather(
            repository.count_customers(),
            repository.count_open_onboardings(),
            repository.monthly_hours(),
            repository.monthly_revenue(),
            return_exceptions=True,
        )
        for outcome in results:
            if isinstance(outcome, BaseException):
                raise outcome
        customers, running, hours, revenue = results

    result = schemas.StatsResponse(
        activeCustomers=int(customers),
        runningProjects=int(running),
        monthlyHours=float(hours or 0),
        monthlyRevenue=float(revenue or 0),
    )
    logger.info("stats %s", result.model_dump())
    return result


async def list_calculations() -> list[dict[str, Any]]:
    with store_errors("Fehler beim Abrufen der Kalkulationen"):
        rows = await repository.list_recent_calculations()
    logger.info("calculations_listed count=%s", len(rows))
    return [_with_float_fields(row) for row in rows]


def _validated(payload: schemas.CalculationCreateRequest) -> tuple[int, float, list[dict[str, Any]]]:
    base_rate = pricing.parse_float(payload.stundensatz) if payload.stundensatz not in (None, "") else None
    if not payload.kunde_id or not base_rate or not payload.dienstleistungen:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Kunde, Stundensatz und Dienstleistungen sind erforderlich",
        )
    lines = [line.model_dump() for line in payload.dienstleistungen]
    return payload.kunde_id, base_rate, lines


async def create_calculation(payload: schemas.CalculationCreateRequest) -> dict[str, Any]:
    kunde_id, base_rate, lines = _validated(payload)
    try:
        totals = pricing.summarize(lines, base_rate)
    except pricing.PricingError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Ungültige Dienstleistungen: {exc}",
        ) from exc

    with store_errors("Fehler beim Erstellen der Kalkulation", with_cause=True):
        row = await repository.insert_calculation_with_lines(
            kunde_id=kunde_id,
            mitarbeiter_id=payload.mitarbeiter_id or settings.default_employee_id(),
            stundensatz=base_rate,
            totals=totals,
        )

    logger.info(
        "calculation_created kalkulations_id=%s kunde_id=%s lines=%s gesamtzeit=%s gesamtpreis=%s",
        row.get("kalkulations_id"),
        kunde_id,
        len(totals.lines),
        totals.gesamtzeit,
        totals.gesamtpreis,
    )
    return {"message": "Kalkulation erfolgreich erstellt", "kalkulation": _with_float_fields(row)}
