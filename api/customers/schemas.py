"""
Customer API schemas.

Fields are optional at the model level; presence is checked in the service so
a missing field is a 400 with a readable message, not a pydantic error list.
"""

from __future__ import annotations

from pydantic import BaseModel

# Postal codes and house numbers arrive as strings or numbers from the dashboard.
StrOrNumber = str | int | float | None


class ContactPersonIn(BaseModel):
    name: str | None = None
    vorname: str | None = None
    telefonnummer: StrOrNumber = None
    email: str | None = None
    position: str | None = None


class CustomerCreateRequest(BaseModel):
    firmenname: str | None = None
    strasse: str | None = None
    hausnummer: StrOrNumber = None
    ort: str | None = None
    plz: StrOrNumber = None
    telefonnummer: StrOrNumber = None
    email: str | None = None
    ansprechpartner: ContactPersonIn | None = None
