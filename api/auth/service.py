"""
Auth business logic.

Login identifies an employee by email. The supplied secret is only checked
when `AUTH_VERIFY_PASSWORD` is enabled; registration always stores a bcrypt
hash, never the plaintext.
"""

from __future__ import annotations

import logging

from fastapi import HTTPException, status

from core import settings
from core.errors import store_errors

from . import repository, schemas, security

logger = logging.getLogger(__name__)


def _to_user_response(user_row: dict) -> schemas.UserResponse:
    return schemas.UserResponse(
        id=int(user_row["mitarbeiter_id"]),
        name=user_row.get("name"),
        vorname=user_row.get("vorname"),
        email=str(user_row["email"]),
        rolle=user_row.get("rolle"),
    )


async def login(payload: schemas.LoginRequest) -> schemas.AuthResponse:
    email = (payload.email or "").strip()
    with store_errors("Fehler beim Login"):
        user_row = await repository.get_employee_by_email(email) if email else None

    if user_row is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Benutzer nicht gefunden",
        )

    if settings.verify_password_on_login():
        stored = str(user_row.get("passwort") or "")
        if not security.verify_password(payload.passwort or "", stored):
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Ungültige Anmeldedaten",
            )

    logger.info("login email=%s", email)
    return schemas.AuthResponse(message="Login erfolgreich", user=_to_user_response(user_row))


async def register(payload: schemas.RegisterRequest) -> schemas.AuthResponse:
    if not (payload.vorname and payload.nachname and payload.email and payload.passwort):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Vorname, Nachname, E-Mail und Passwort sind erforderlich",
        )

    with store_errors("Fehler bei der Registrierung"):
        if await repository.email_exists(payload.email):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Benutzer existiert bereits",
            )

        password_hash = security.hash_password(payload.passwort)
        user_row = await repository.create_employee(
            name=payload.nachname,
            vorname=payload.vorname,
            email=payload.email,
            password_hash=password_hash,
        )

    logger.info("employee_registered id=%s email=%s", user_row["mitarbeiter_id"], payload.email)
    return schemas.AuthResponse(message="Registrierung erfolgreich", user=_to_user_response(user_row))
