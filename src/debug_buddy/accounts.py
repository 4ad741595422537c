"""Account registration, login and per-account stats."""

import hashlib
import hmac
import logging
import secrets
from typing import Optional

from pydantic import TypeAdapter
from pydantic import ValidationError as SchemaError

from debug_buddy.errors import (
    AuthError,
    ConflictError,
    NotAuthenticatedError,
    NotFoundError,
    ValidationError,
)
from debug_buddy.models import Account, Session
from debug_buddy.storage import KeyValueStore

logger = logging.getLogger(__name__)

ACCOUNTS_KEY = "accounts"
CURRENT_ACCOUNT_KEY = "current_account"
MIN_PASSWORD_LENGTH = 6

_accounts_adapter = TypeAdapter(list[Account])


class PasswordHasher:
    """Salted PBKDF2-HMAC-SHA256 hashes in ``algo$iterations$salt$digest`` form."""

    algorithm = "pbkdf2_sha256"

    def __init__(self, iterations: int = 600_000, salt_bytes: int = 16) -> None:
        self.iterations = iterations
        self.salt_bytes = salt_bytes

    def _derive(self, password: str, salt: bytes, iterations: int) -> bytes:
        return hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, iterations)

    def hash(self, password: str) -> str:
        salt = secrets.token_bytes(self.salt_bytes)
        digest = self._derive(password, salt, self.iterations)
        return f"{self.algorithm}${self.iterations}${salt.hex()}${digest.hex()}"

    def verify(self, password: str, encoded: str) -> bool:
        try:
            algorithm, iterations, salt_hex, digest_hex = encoded.split("$")
            salt = bytes.fromhex(salt_hex)
            expected = bytes.fromhex(digest_hex)
            rounds = int(iterations)
        except ValueError:
            return False
        if algorithm != self.algorithm:
            return False
        return hmac.compare_digest(self._derive(password, salt, rounds), expected)


class AccountStore:
    """Owns the account collection and the remembered-login slot.

    Every mutation reads the whole collection, changes it and writes it
    back. There is no locking: concurrent writers can lose updates.
    """

    def __init__(
        self, storage: KeyValueStore, hasher: Optional[PasswordHasher] = None
    ) -> None:
        self._storage = storage
        self._hasher = hasher or PasswordHasher()

    # ── Collection plumbing ───────────────────────────────────────────────

    def _load(self) -> list[Account]:
        raw = self._storage.get(ACCOUNTS_KEY)
        if raw is None:
            return []
        if not isinstance(raw, list):
            logger.warning("Stored accounts are not a list, starting empty")
            return []
        accounts: list[Account] = []
        for index, item in enumerate(raw):
            try:
                accounts.append(Account.model_validate(item))
            except SchemaError as exc:
                logger.warning("Dropping unreadable account record #%d: %s", index, exc)
        return accounts

    def _save(self, accounts: list[Account]) -> None:
        self._storage.set(ACCOUNTS_KEY, _accounts_adapter.dump_python(accounts, mode="json"))

    def _remember(self, account: Account) -> None:
        self._storage.set(CURRENT_ACCOUNT_KEY, account.id)

    def list_accounts(self) -> list[Account]:
        return self._load()

    def get(self, user_id: str) -> Optional[Account]:
        return next((a for a in self._load() if a.id == user_id), None)

    # ── Operations ────────────────────────────────────────────────────────

    def register(
        self, session: Session, username: str, email: str, password: str
    ) -> Account:
        """Create an account and log it in."""
        if not username or not email or not password:
            raise ValidationError("All fields are required")
        if len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
            )
        if "@" not in email:
            raise ValidationError("Invalid email format")

        accounts = self._load()
        if any(a.username.lower() == username.lower() for a in accounts):
            raise ConflictError("Username is already taken")
        if any(a.email.lower() == email.lower() for a in accounts):
            raise ConflictError("Email is already registered")

        account = Account(
            username=username,
            email=email,
            credential_secret=self._hasher.hash(password),
        )
        accounts.append(account)
        self._save(accounts)
        logger.info("Registered account %s (%s)", account.username, account.id)

        return self.login(session, username, password)

    def login(self, session: Session, username: str, password: str) -> Account:
        """Authenticate by case-insensitive username and set the session."""
        account = next(
            (a for a in self._load() if a.username.lower() == username.lower()),
            None,
        )
        if account is None:
            raise NotFoundError("User not found")
        if not self._hasher.verify(password, account.credential_secret):
            logger.info("Rejected login for %s", account.username)
            raise AuthError("Incorrect password")

        session.set(account)
        self._remember(account)
        return account

    def logout(self, session: Session) -> None:
        session.clear()
        self._storage.delete(CURRENT_ACCOUNT_KEY)

    def restore_session(self, session: Session) -> Optional[Account]:
        """Log the remembered account back in, if it still exists."""
        user_id = self._storage.get(CURRENT_ACCOUNT_KEY)
        if not isinstance(user_id, str):
            return None
        account = self.get(user_id)
        if account is None:
            self._storage.delete(CURRENT_ACCOUNT_KEY)
            return None
        session.set(account)
        return account

    def record_analysis_stats(
        self, session: Session, count: int, average_score: float
    ) -> Account:
        """Overwrite the session account's analysis count and average score."""
        if session.account is None:
            raise NotAuthenticatedError("You need to be logged in")

        updated = session.account.model_copy(
            update={"analyses_count": count, "average_score": average_score}
        )
        session.set(updated)
        self._remember(updated)

        accounts = self._load()
        for index, account in enumerate(accounts):
            if account.id == updated.id:
                accounts[index] = updated
                self._save(accounts)
                break
        return updated
