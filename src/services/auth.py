"""Authentication service for session tokens and password handling."""

import logging
import secrets
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from src.config import get_settings
from src.models.user import User

logger = logging.getLogger(__name__)

settings = get_settings()

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password."""
    return pwd_context.hash(password)


def create_access_token(user_id: int) -> str:
    """Create a signed session token.

    The random ``jti`` makes every login produce a distinct token even within
    the same second, so the stored token identifies exactly one session.
    """
    expire = datetime.now(UTC) + timedelta(minutes=settings.jwt_expiration_minutes)
    to_encode = {
        "sub": str(user_id),
        "jti": secrets.token_hex(16),
        "exp": expire,
    }
    encoded_jwt = jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)
    return encoded_jwt


def decode_access_token(token: str) -> dict | None:
    """Decode and validate a session token."""
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
        return payload
    except JWTError:
        return None


def resolve_token(db: Session, token: str) -> User | None:
    """Return the user whose active session token is ``token``, if any."""
    if decode_access_token(token) is None:
        return None
    return db.query(User).filter(User.auth_token == token).first()


def authenticate_user(db: Session, email: str, password: str) -> User | None:
    """Authenticate a user by email and password."""
    user = db.query(User).filter(User.email == email).first()
    if not user:
        return None
    if not verify_password(password, user.password_hash):
        return None
    return user


def start_session(db: Session, user: User) -> str:
    """Issue a new token for the user, replacing any previous session."""
    token = create_access_token(user.id)
    user.auth_token = token
    db.commit()
    logger.info(f"User {user.id} logged in")
    return token


def end_session(db: Session, user: User) -> None:
    """Clear the user's stored session token."""
    user.auth_token = None
    db.commit()
    logger.info(f"User {user.id} logged out")


def get_user_by_email(db: Session, email: str) -> User | None:
    """Get a user by email."""
    return db.query(User).filter(User.email == email).first()


def create_user(
    db: Session, email: str, password: str, first_name: str, last_name: str
) -> User:
    """Create a new user."""
    hashed_password = get_password_hash(password)
    user = User(
        email=email,
        password_hash=hashed_password,
        first_name=first_name,
        last_name=last_name,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info(f"Registered user {user.id}")
    return user
