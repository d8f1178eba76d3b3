"""
Calculation (`kalkulation`) and service line (`dienstleistung`) persistence.
"""

from __future__ import annotations

from typing import Any

from core import db

from .pricing import CalculationTotals
from .schemas import Status

RECENT_LIMIT = 10


async def count_customers() -> int:
    row = await db.fetch_one("SELECT COUNT(*) AS n FROM kunde")
    return int((row or {}).get("n", 0))


async def count_open_onboardings() -> int:
    row = await db.fetch_one(
        "SELECT COUNT(*) AS n FROM onboarding WHERE status IN ($1, $2)",
        Status.NEW.value,
        Status.IN_PROGRESS.value,
    )
    return int((row or {}).get("n", 0))


async def monthly_hours() -> float:
    row = await db.fetch_one(
        """
        SELECT COALESCE(SUM(gesamtzeit), 0)::float8 AS total_hours
        FROM kalkulation
        WHERE EXTRACT(MONTH FROM datum) = EXTRACT(MONTH FROM CURRENT_DATE)
          AND EXTRACT(YEAR  FROM datum) = EXTRACT(YEAR FROM CURRENT_DATE)
        """
    )
    return float((row or {}).get("total_hours") or 0)


async def monthly_revenue() -> float:
    row = await db.fetch_one(
        """
        SELECT COALESCE(SUM(gesamtpreis), 0)::float8 AS total_revenue
        FROM kalkulation
        WHERE EXTRACT(MONTH FROM datum) = EXTRACT(MONTH FROM CURRENT_DATE)
          AND EXTRACT(YEAR  FROM datum) = EXTRACT(YEAR FROM CURRENT_DATE)
          AND status = $1
        """,
        Status.DONE.value,
    )
    return float((row or {}).get("total_revenue") or 0)


async def list_recent_calculations(limit: int = RECENT_LIMIT) -> list[dict[str, Any]]:
    """
    Most recent calculations with customer name; employee is optional.
    """
    return await db.fetch_all(
        """
        SELECT
          k.kalkulations_id,
          k.datum,
          k.status,
          k.stundensatz::float8   AS stundensatz,
          k.gesamtzeit::float8    AS gesamtzeit,
          k.gesamtpreis::float8   AS gesamtpreis,
          ku.firmenname           AS kunde_name,
          m.name                  AS mitarbeiter_name,
          m.vorname               AS mitarbeiter_vorname
        FROM kalkulation k
        JOIN kunde ku           ON k.kunde_id = ku.kunden_id
        LEFT JOIN mitarbeiter m ON k.mitarbeiter_id = m.mitarbeiter_id
        ORDER BY k.datum DESC
        LIMIT $1
        """,
        limit,
    )


async def insert_calculation_with_lines(
    *,
    kunde_id: int,
    mitarbeiter_id: int,
    stundensatz: float,
    totals: CalculationTotals,
) -> dict[str, Any]:
    """
    Insert the calculation row, then one service line per priced line, in a
    single transaction. Returns the calculation row.
    """
    async with db.transaction() as conn:
        row = await db.fetch_in(
            conn,
            """
            INSERT INTO kalkulation (datum, gesamtpreis, gesamtzeit, stundensatz, status, kunde_id, mitarbeiter_id)
            VALUES (CURRENT_DATE, $1, $2, $3, $4, $5, $6)
            RETURNING kalkulations_id, datum, status, stundensatz::float8 AS stundensatz,
                      gesamtzeit::float8 AS gesamtzeit, gesamtpreis::float8 AS gesamtpreis
            """,
            totals.gesamtpreis,
            totals.gesamtzeit,
            stundensatz,
            Status.NEW.value,
            kunde_id,
            mitarbeiter_id,
        )
        if row is None or "kalkulations_id" not in row:
            raise RuntimeError("Failed to insert calculation.")

        kalkulations_id = row["kalkulations_id"]
        records = [
            (
                line.beschreibung,
                line.dauer_pro_einheit,
                line.anzahl,
                line.gesamtdauer,
                line.info,
                kalkulations_id,
                line.stundensatz,
            )
            for line in totals.lines
        ]
        await conn.executemany(
            """
            INSERT INTO dienstleistung (beschreibung, dauer_pro_einheit, anzahl, gesamtdauer, info, kalkulation_id, stundensatz)
            VALUES ($1, $2, $3, $4, $5, $6, $7)
            """,
            records,
        )
        return row
