"""Email/password authentication and the persisted session."""

import hashlib
import hmac
import logging
import secrets
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol, runtime_checkable

from ..db.repositories import UserRepository
from ..errors import AuthError
from ..storage.local import LocalStore
from ..storage.namespaces import Namespace

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6
_HASH_ITERATIONS = 200_000


@dataclass
class User:
    """An authenticated identity."""

    id: str
    email: str


@runtime_checkable
class AuthProvider(Protocol):
    """Anything that can report the currently authenticated user."""

    async def get_current_user(self) -> User | None:
        ...


def hash_password(password: str, salt: str | None = None) -> str:
    """Return ``salt$hexdigest`` using PBKDF2-HMAC-SHA256."""
    salt = salt or secrets.token_hex(16)
    digest = hashlib.pbkdf2_hmac(
        "sha256", password.encode("utf-8"), salt.encode("utf-8"), _HASH_ITERATIONS
    )
    return f"{salt}${digest.hex()}"


def verify_password(password: str, stored: str) -> bool:
    salt, _, _ = stored.partition("$")
    return hmac.compare_digest(hash_password(password, salt), stored)


def normalize_email(email: str) -> str:
    return email.strip().lower()


class AuthService:
    """Registers users, signs them in and out, and resolves the session.

    The session is kept in the local store under its own key, outside the
    namespaces that get migrated and cleared.
    """

    def __init__(self, local_store: LocalStore, db_path: Path | None = None):
        self.local_store = local_store
        self.users = UserRepository(db_path)

    async def sign_up(self, email: str, password: str) -> User:
        """Register a new user (does not sign in)."""
        email = normalize_email(email)
        if "@" not in email:
            raise AuthError("Please enter a valid email address")
        if len(password) < MIN_PASSWORD_LENGTH:
            raise AuthError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
            )
        if await self.users.get_by_email(email):
            raise AuthError(f"User already registered: {email}")

        user_id = await self.users.create(email, hash_password(password))
        logger.info("Registered user %s", user_id)
        return User(id=user_id, email=email)

    async def sign_in(self, email: str, password: str) -> User:
        """Verify credentials and persist the session."""
        row = await self.users.get_by_email(normalize_email(email))
        if row is None or not verify_password(password, row["password_hash"]):
            raise AuthError("Invalid email or password")

        user = User(id=row["id"], email=row["email"])
        self.local_store.write_object(
            Namespace.SESSION, {"userId": user.id, "email": user.email}
        )
        logger.info("Signed in user %s", user.id)
        return user

    def sign_out(self) -> None:
        """Forget the persisted session."""
        self.local_store.clear([Namespace.SESSION])

    async def get_current_user(self) -> User | None:
        """The signed-in user, or None when there is no valid session."""
        session = self.local_store.read_object(Namespace.SESSION)
        if not session or not session.get("userId"):
            return None
        row = await self.users.get(session["userId"])
        if row is None:
            return None
        return User(id=row["id"], email=row["email"])
