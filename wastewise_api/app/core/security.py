"""
Security helpers for password hashing and session authentication.

Passwords are hashed with PBKDF2-HMAC using SHA-256 and a random salt
per password; the stored string is ``salthex$hashhex``.  Sessions are
kept in a signed cookie managed by Starlette's ``SessionMiddleware``
(see ``main.create_app``); the authenticated subject is stored under
``request.session["user_id"]``.

FastAPI dependencies:

* ``get_current_user_id`` returns the session subject or raises 401.
* ``get_current_user`` additionally resolves the stored user and
  raises 401 when it no longer exists.
"""

import hashlib
import hmac
import os
from typing import Optional

from fastapi import Depends, HTTPException, Request, status

from ..schemas.user import User

PBKDF2_ITERATIONS = 100_000
SESSION_USER_KEY = "user_id"


def hash_password(password: str) -> str:
    """Hash a password using PBKDF2-HMAC with SHA-256.

    A 16-byte random salt is generated for each password.  The
    resulting string contains the salt and hash in hex separated by
    ``$``.

    Parameters
    ----------
    password : str
        The plain text password to hash.

    Returns
    -------
    str
        Salt and hash concatenated with ``$``.
    """
    salt = os.urandom(16)
    dk = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, PBKDF2_ITERATIONS)
    return f"{salt.hex()}${dk.hex()}"


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain password against a stored ``salt$hash`` string.

    Malformed stored values never match.
    """
    try:
        salt_hex, hash_hex = hashed_password.split("$", 1)
        salt = bytes.fromhex(salt_hex)
        stored_hash = bytes.fromhex(hash_hex)
    except ValueError:
        return False
    dk = hashlib.pbkdf2_hmac("sha256", plain_password.encode("utf-8"), salt, PBKDF2_ITERATIONS)
    return hmac.compare_digest(dk, stored_hash)


def login_session(request: Request, user_id: int) -> None:
    request.session.clear()
    request.session[SESSION_USER_KEY] = user_id


def logout_session(request: Request) -> None:
    request.session.clear()


def session_user_id(request: Request) -> Optional[int]:
    value = request.session.get(SESSION_USER_KEY)
    return value if isinstance(value, int) else None


def get_current_user_id(request: Request) -> int:
    """Dependency returning the session subject.

    Raises HTTP 401 when the request carries no valid session.
    """
    user_id = session_user_id(request)
    if user_id is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")
    return user_id


async def get_current_user(
    request: Request,
    user_id: int = Depends(get_current_user_id),
) -> User:
    """Dependency resolving the session subject to a stored user."""
    storage = request.app.state.storage
    user = await storage.get_user(user_id)
    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")
    return user
