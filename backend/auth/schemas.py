# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20260206v1
# ---------------------------------------------------------------------------
"""Pydantic request / response models for the auth endpoints."""

from typing import Optional

from pydantic import BaseModel


# -- Requests --------------------------------------------------------------
# Every field is optional at the schema level so that a missing field is
# reported by the handler as a 400 with a readable message.


class RegisterRequest(BaseModel):
    firstName: Optional[str] = None
    lastName: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    role: Optional[str] = None


class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


# -- Responses -------------------------------------------------------------
# The password hash never leaves the server.


class UserPublic(BaseModel):
    id: int
    firstName: str
    lastName: str
    email: str
    role: str
