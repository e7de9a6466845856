# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20260206v1
# ---------------------------------------------------------------------------
"""
Password hashing.  No other module should touch raw crypto directly.

bcrypt via passlib, cost factor taken from ``settings.bcrypt_rounds`` (10).
The salt is embedded in the hash string, so a single column stores it.

There is deliberately no token issuing here: a successful login only proves
the legitimacy of that one request.
"""

from passlib.context import CryptContext

from core.config import settings

_pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.bcrypt_rounds,
)


def hash_password(plain: str) -> str:
    """Return the full bcrypt hash string, e.g. ``"$2b$10$..."``."""
    return _pwd_context.hash(plain)


def verify_password(plain: str, stored_hash: str) -> bool:
    """
    Constant-time verification of a plaintext password against a hash
    produced by :func:`hash_password`.
    """
    return _pwd_context.verify(plain, stored_hash)
