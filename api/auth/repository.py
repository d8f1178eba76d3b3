"""
Employee (`mitarbeiter`) persistence helpers.
"""

from __future__ import annotations

from core import db

DEFAULT_ROLE = "aussendienst"


async def get_employee_by_email(email: str) -> dict | None:
    return await db.fetch_one(
        """
        SELECT mitarbeiter_id, name, vorname, email, passwort, rolle
        FROM mitarbeiter
        WHERE email = $1
        """,
        email,
    )


async def email_exists(email: str) -> bool:
    row = await db.fetch_one(
        "SELECT mitarbeiter_id FROM mitarbeiter WHERE email = $1",
        email,
    )
    return row is not None


async def create_employee(*, name: str, vorname: str, email: str, password_hash: str) -> dict:
    row = await db.fetch_one(
        """
        INSERT INTO mitarbeiter (name, vorname, email, passwort, telefonnummer, rolle)
        VALUES ($1, $2, $3, $4, '', $5)
        RETURNING mitarbeiter_id, name, vorname, email, rolle
        """,
        name,
        vorname,
        email,
        password_hash,
        DEFAULT_ROLE,
    )
    if row is None:
        raise RuntimeError("Failed to create employee.")
    return row
