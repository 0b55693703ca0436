"""
User Registration (Single Responsibility)

Validation, storage, mail and orchestration each live in their own class.
UserService only coordinates them.
"""

import hashlib
import logging
import threading
from dataclasses import dataclass, field

from ..errors import InvalidArgumentError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 8


@dataclass(frozen=True)
class User:
    email: str
    name: str
    password_hash: str = field(repr=False)


@dataclass(frozen=True)
class ValidationResult:
    errors: tuple[str, ...] = ()

    @property
    def is_valid(self) -> bool:
        return not self.errors


class UserValidator:
    def validate(self, email: str, password: str, name: str) -> ValidationResult:
        errors = []
        if not email or not email.strip() or "@" not in email:
            errors.append("Invalid email address")
        if not password or len(password) < MIN_PASSWORD_LENGTH:
            errors.append(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
        if not name or not name.strip():
            errors.append("Name is required")
        return ValidationResult(tuple(errors))


class InMemoryUserRepository:
    def __init__(self) -> None:
        self._users: dict[str, User] = {}
        self._lock = threading.Lock()

    def save(self, user: User) -> None:
        key = user.email.lower()
        with self._lock:
            if key in self._users:
                raise InvalidArgumentError("email", user.email, f"User {user.email} already exists")
            self._users[key] = user
        logger.debug("Saved user %s", user.email)

    def get_by_email(self, email: str) -> User:
        with self._lock:
            user = self._users.get(email.lower())
        if user is None:
            raise NotFoundError("user", email)
        return user

    def __len__(self) -> int:
        with self._lock:
            return len(self._users)


class WelcomeMailer:
    """Records outgoing welcome emails instead of talking to an SMTP server."""

    def __init__(self, sender: str = "noreply@example.com"):
        self.sender = sender
        self.outbox: list[tuple[str, str, str]] = []

    def send_welcome_email(self, email: str, name: str) -> None:
        body = f"Welcome {name}! Your account has been created."
        self.outbox.append((email, "Welcome!", body))
        logger.info("Welcome email queued for %s", email)


def hash_password(password: str) -> str:
    return hashlib.sha256(password.encode("utf-8")).hexdigest()


class UserService:
    def __init__(
        self,
        validator: UserValidator,
        repository: InMemoryUserRepository,
        mailer: WelcomeMailer,
    ):
        self._validator = validator
        self._repository = repository
        self._mailer = mailer

    def create_user(self, email: str, password: str, name: str) -> User:
        result = self._validator.validate(email, password, name)
        if not result.is_valid:
            for error in result.errors:
                logger.warning("Validation failed for %s: %s", email, error)
            raise ValidationError(result.errors)

        user = User(email=email.strip(), name=name.strip(), password_hash=hash_password(password))
        self._repository.save(user)
        logger.info("User %s created successfully", user.email)
        self._mailer.send_welcome_email(user.email, user.name)
        return user
