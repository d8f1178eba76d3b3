"""
Auth API schemas (request/response models).
"""

from __future__ import annotations

from pydantic import BaseModel


class LoginRequest(BaseModel):
    email: str | None = None
    passwort: str | None = None


class RegisterRequest(BaseModel):
    vorname: str | None = None
    nachname: str | None = None
    email: str | None = None
    passwort: str | None = None


class UserResponse(BaseModel):
    id: int
    name: str | None = None
    vorname: str | None = None
    email: str
    rolle: str | None = None


class AuthResponse(BaseModel):
    message: str
    user: UserResponse
