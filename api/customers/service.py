"""
Customer business logic.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import HTTPException, status

from core.errors import store_errors

from . import repository, schemas

logger = logging.getLogger(__name__)

DEFAULT_CONTACT_POSITION = "Hauptansprechpartner"

REQUIRED_FIELDS = ("firmenname", "strasse", "hausnummer", "ort", "plz", "telefonnummer", "email")


def _text(value: Any) -> str:
    # Numbers from the form (plz, hausnummer) are stored as text.
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value).strip()


def customer_fields(payload: schemas.CustomerCreateRequest) -> dict[str, str]:
    values = {name: getattr(payload, name) for name in REQUIRED_FIELDS}
    if any(value is None or not _text(value) for value in values.values()):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Alle Pflichtfelder müssen ausgefüllt werden",
        )
    return {name: _text(value) for name, value in values.items()}


def contact_fields(
    contact: schemas.ContactPersonIn | None,
    customer: dict[str, str],
) -> dict[str, str] | None:
    """
    Contact row to insert alongside the customer, or None.

    A contact is only created when both name and first name are given; phone
    and email fall back to the customer's own.
    """
    if contact is None or not contact.name or not contact.vorname:
        return None
    phone = _text(contact.telefonnummer) if contact.telefonnummer is not None else ""
    return {
        "name": contact.name,
        "vorname": contact.vorname,
        "telefonnummer": phone or customer["telefonnummer"],
        "email": contact.email or customer["email"],
        "position": contact.position or DEFAULT_CONTACT_POSITION,
    }


async def list_customers() -> list[dict[str, Any]]:
    with store_errors("Fehler beim Abrufen der Kunden"):
        rows = await repository.list_customers()
    logger.info("customers_listed count=%s", len(rows))
    return [
        {
            **row,
            "ansprechpartner_count": int(row.get("ansprechpartner_count") or 0),
            "onboarding_count": int(row.get("onboarding_count") or 0),
        }
        for row in rows
    ]


async def create_customer(payload: schemas.CustomerCreateRequest) -> dict[str, Any]:
    customer = customer_fields(payload)

    with store_errors("Fehler beim Erstellen des Kunden", with_cause=True):
        # Check-then-insert: two concurrent requests can both pass this check
        # unless the table has a unique constraint.
        existing = await repository.find_customer_by_email_or_company(
            email=customer["email"],
            firmenname=customer["firmenname"],
        )
        if existing is not None:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Kunde mit dieser E-Mail oder Firma existiert bereits",
            )

        row = await repository.insert_customer_with_contact(
            customer,
            contact_fields(payload.ansprechpartner, customer),
        )

    logger.info("customer_created kunden_id=%s firmenname=%s", row.get("kunden_id"), customer["firmenname"])
    return {"message": "Kunde erfolgreich erstellt", "kunde": row}
