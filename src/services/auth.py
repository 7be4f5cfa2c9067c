"""Authentication service for JWT and password handling."""

import logging
import re
from datetime import UTC, datetime, timedelta

from email_validator import EmailNotValidError, validate_email
from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from src.config import Settings, get_settings
from src.exceptions import AuthError, ConflictError, InternalError, NotFoundError, ValidationError
from src.models.user import User

logger = logging.getLogger(__name__)

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

_DIGIT_RE = re.compile(r"\d")

# bcrypt ignores everything past this many bytes
BCRYPT_MAX_BYTES = 72


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password."""
    return pwd_context.hash(password)


def normalize_email(email: str | None) -> str:
    """Validate an email address and return its lower-cased form."""
    if not email or not email.strip():
        raise ValidationError("Email is required")
    try:
        validate_email(email.strip(), check_deliverability=False)
    except EmailNotValidError as e:
        raise ValidationError("Invalid email address", details=str(e)) from e
    return email.strip().lower()


def validate_password_policy(password: str | None, min_length: int) -> None:
    """Require a minimum length, at least one digit, and no more bytes than bcrypt reads."""
    if not password:
        raise ValidationError("Password is required")
    if len(password) < min_length:
        raise ValidationError(f"Password must be at least {min_length} characters long")
    if len(password.encode("utf-8")) > BCRYPT_MAX_BYTES:
        raise ValidationError(f"Password must be at most {BCRYPT_MAX_BYTES} bytes long")
    if not _DIGIT_RE.search(password):
        raise ValidationError("Password must contain at least one digit")


def create_access_token(user_id: int, email: str, settings: Settings | None = None) -> str:
    """Create a JWT access token."""
    settings = settings or get_settings()
    now = datetime.now(UTC)
    to_encode = {
        "sub": str(user_id),
        "email": email,
        "iat": now,
        "exp": now + timedelta(minutes=settings.jwt_expiration_minutes),
    }
    return jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str, settings: Settings | None = None) -> dict | None:
    """Decode and validate a JWT token."""
    settings = settings or get_settings()
    try:
        return jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None


class AuthService:
    """Registration, login, and token verification."""

    def __init__(self, db: Session, settings: Settings | None = None):
        self.db = db
        self.settings = settings or get_settings()

    def get_user_by_email(self, email: str) -> User | None:
        """Get a user by (already normalized) email."""
        return self.db.query(User).filter(User.email == email).first()

    def register(
        self, email: str | None, password: str | None, name: str | None = None
    ) -> tuple[str, User]:
        """Create a user and return a token for them along with the user."""
        normalized = normalize_email(email)
        validate_password_policy(password, self.settings.password_min_length)

        if self.get_user_by_email(normalized):
            raise ConflictError("User already exists")

        user = User(email=normalized, password_hash=get_password_hash(password), name=name)
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError as e:
            # Lost a race with a concurrent registration for the same email
            self.db.rollback()
            raise ConflictError("User already exists") from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to create user: {e}")
            raise InternalError("Failed to create user", details=str(e)) from e
        self.db.refresh(user)

        logger.info(f"Registered user {user.id}")
        return create_access_token(user.id, user.email, self.settings), user

    def login(self, email: str | None, password: str | None) -> tuple[str, User]:
        """Check credentials and return a fresh token with the user."""
        if not email or not password:
            raise AuthError("Invalid credentials")
        if len(password.encode("utf-8")) > BCRYPT_MAX_BYTES:
            # Would otherwise match a stored password on its first 72 bytes
            raise AuthError("Invalid credentials")

        user = self.get_user_by_email(email.strip().lower())
        if not user or not verify_password(password, user.password_hash):
            logger.warning("Failed login attempt")
            raise AuthError("Invalid credentials")

        return create_access_token(user.id, user.email, self.settings), user

    def verify_token(self, token: str | None) -> int:
        """Return the user id carried by a valid token."""
        if not token:
            raise AuthError("Authentication required")

        payload = decode_access_token(token, self.settings)
        if payload is None:
            raise AuthError("Invalid or expired token")

        try:
            return int(payload["sub"])
        except (KeyError, TypeError, ValueError) as e:
            raise AuthError("Invalid or expired token") from e

    def get_profile(self, user_id: int) -> User:
        """Get the user row behind a verified token."""
        user = self.db.query(User).filter(User.id == user_id).first()
        if user is None:
            raise NotFoundError("User not found")
        return user
