"""Authentication service for passwords, tokens and refresh sessions."""

import logging
import secrets
import string
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from idea_pool.config import get_settings
from idea_pool.models.user import User
from idea_pool.schemas.auth import normalize_email
from idea_pool.services.results import ErrorKind, FieldError, Result
from idea_pool.services.sessions import SessionCache

logger = logging.getLogger(__name__)
settings = get_settings()

# Password hashing context
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.bcrypt_rounds,
)

REFRESH_TOKEN_ALPHABET = string.ascii_letters + string.digits


def verify_password(plain_password: str, hashed_password: str | None) -> bool:
    """Verify a password against its hash. Malformed hashes never match."""
    if not hashed_password:
        return False
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except (ValueError, TypeError):
        return False


def get_password_hash(password: str) -> str:
    """Hash a password with a fresh random salt."""
    return pwd_context.hash(password)


def create_access_token(user_id: int, expires_delta: timedelta | None = None) -> str:
    """Create a signed JWT access token for a user."""
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.access_token_expire_minutes)
    expire = datetime.now(UTC) + expires_delta
    to_encode = {
        "sub": str(user_id),
        "exp": expire,
    }
    return jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str | None) -> int | None:
    """Decode a JWT access token and return its user id.

    Returns None for a missing, tampered, malformed or expired token.
    """
    if not token:
        return None
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None

    if "exp" not in payload:
        return None
    try:
        return int(payload["sub"])
    except (KeyError, TypeError, ValueError):
        return None


def generate_refresh_token(length: int | None = None) -> str:
    """Generate an opaque random refresh token."""
    length = length or settings.refresh_token_length
    return "".join(secrets.choice(REFRESH_TOKEN_ALPHABET) for _ in range(length))


@dataclass(frozen=True)
class IssuedTokens:
    """Access and refresh token pair handed out on signup and login."""

    access_token: str
    refresh_token: str


class AuthService:
    """Credential store and session lifecycle for users."""

    def __init__(self, db: Session, sessions: SessionCache):
        self.db = db
        self.sessions = sessions

    # Credential store

    def find_by_email(self, email: str) -> User | None:
        """Get a user by email, ignoring case and surrounding whitespace."""
        return self.db.query(User).filter(User.email == normalize_email(email)).first()

    def find_by_id(self, user_id: int) -> User | None:
        """Get a user by id."""
        return self.db.query(User).filter(User.id == user_id).first()

    def create_user(self, email: str, name: str, password_hash: str) -> Result[User]:
        """Insert a user unless the normalized email is already taken."""
        email = normalize_email(email)
        if self.find_by_email(email) is not None:
            return Result.failure(ErrorKind.CONFLICT, FieldError("email", "User already exists"))

        user = User(email=email, name=name, password_hash=password_hash)
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError:
            # Lost a race with a concurrent signup; the unique index decides
            self.db.rollback()
            return Result.failure(ErrorKind.CONFLICT, FieldError("email", "User already exists"))
        self.db.refresh(user)
        return Result.success(user)

    # Session lifecycle

    def _issue_tokens(self, user_id: int) -> IssuedTokens:
        refresh_token = generate_refresh_token()
        self.sessions.put(refresh_token, user_id)
        return IssuedTokens(
            access_token=create_access_token(user_id),
            refresh_token=refresh_token,
        )

    def register(self, email: str, name: str, password: str) -> Result[IssuedTokens]:
        """Create a user and open a session for them."""
        created = self.create_user(email, name, get_password_hash(password))
        if not created.ok:
            return Result.failure(created.error, *created.errors)

        user = created.value
        logger.info(f"Registered user {user.id}")
        return Result.success(self._issue_tokens(user.id))

    def login(self, email: str, password: str) -> Result[IssuedTokens]:
        """Check credentials and open a new session."""
        user = self.find_by_email(email) if email else None
        if user is None:
            # Spend the same hashing time as a real comparison
            pwd_context.dummy_verify()
            return Result.failure(ErrorKind.UNAUTHORIZED)

        if not verify_password(password, user.password_hash):
            logger.info(f"Rejected login for user {user.id}")
            return Result.failure(ErrorKind.UNAUTHORIZED)

        logger.info(f"User {user.id} logged in")
        return Result.success(self._issue_tokens(user.id))

    def refresh(self, refresh_token: str) -> Result[str]:
        """Exchange a live refresh token for a new access token."""
        invalid = FieldError("refresh_token", "Invalid token")
        user_id = self.sessions.get(refresh_token)
        if user_id is None or self.find_by_id(user_id) is None:
            return Result.failure(ErrorKind.VALIDATION, invalid)

        logger.debug(f"Refreshed access token for user {user_id}")
        return Result.success(create_access_token(user_id))

    def logout(self, user_id: int, refresh_token: str) -> Result[None]:
        """Revoke one of the user's refresh tokens."""
        if self.sessions.get(refresh_token) != user_id:
            return Result.failure(
                ErrorKind.VALIDATION, FieldError("refresh_token", "Invalid token")
            )

        self.sessions.delete(refresh_token)
        logger.info(f"User {user_id} logged out")
        return Result.success()
