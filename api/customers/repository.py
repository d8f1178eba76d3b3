"""
Customer (`kunde`) and contact person (`ansprechpartner`) persistence.
"""

from __future__ import annotations

import logging
from typing import Any

from core import db

logger = logging.getLogger(__name__)


async def list_customers() -> list[dict[str, Any]]:
    """
    All customers, newest id first, with contact and onboarding counts.
    """
    return await db.fetch_all(
        """
        SELECT
          k.*,
          COUNT(DISTINCT a.ansprechpartner_id) AS ansprechpartner_count,
          COUNT(DISTINCT o.onboarding_id)     AS onboarding_count
        FROM kunde k
        LEFT JOIN ansprechpartner a ON k.kunden_id = a.kunde_id
        LEFT JOIN onboarding o     ON k.kunden_id = o.kunde_id
        GROUP BY k.kunden_id
        ORDER BY k.kunden_id DESC
        """
    )


async def find_customer_by_email_or_company(*, email: str, firmenname: str) -> dict[str, Any] | None:
    return await db.fetch_one(
        "SELECT kunden_id FROM kunde WHERE email = $1 OR firmenname = $2",
        email,
        firmenname,
    )


async def insert_customer_with_contact(
    customer: dict[str, Any],
    contact: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """
    Insert a customer and, optionally, its contact person in one transaction.

    Returns the inserted customer row.
    """
    async with db.transaction() as conn:
        row = await db.fetch_in(
            conn,
            """
            INSERT INTO kunde (firmenname, strasse, hausnummer, ort, plz, telefonnummer, email)
            VALUES ($1, $2, $3, $4, $5, $6, $7)
            RETURNING *
            """,
            customer["firmenname"],
            customer["strasse"],
            customer["hausnummer"],
            customer["ort"],
            customer["plz"],
            customer["telefonnummer"],
            customer["email"],
        )
        if row is None:
            raise RuntimeError("Failed to insert customer.")

        if contact is not None:
            await conn.execute(
                """
                INSERT INTO ansprechpartner (name, vorname, telefonnummer, email, position, kunde_id)
                VALUES ($1, $2, $3, $4, $5, $6)
                """,
                contact["name"],
                contact["vorname"],
                contact["telefonnummer"],
                contact["email"],
                contact["position"],
                row["kunden_id"],
            )
            logger.info("contact_person_added kunde_id=%s", row["kunden_id"])

        return row
