"""Account registration, login and session issuance."""

import logging
from datetime import datetime, timezone
from uuid import uuid4

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from partydrop.config import Settings
from partydrop.core.exceptions import EmailInUse, InternalError, InvalidCredentials
from partydrop.core.security import create_access_token, hash_password, verify_password
from partydrop.models.user import User
from partydrop.schemas.auth import Credentials, UserResponse

logger = logging.getLogger(__name__)

# Checked against on unknown emails so both login failures cost one bcrypt round
DUMMY_PASSWORD_HASH = hash_password("partydrop-dummy-password")


def issue_session_token(user: User, settings: Settings) -> str:
    """Sign a session token carrying the user's public identity."""
    return create_access_token(
        data={"id": str(user.id), "email": user.email, "role": user.role},
        settings=settings,
    )


def to_user_response(user: User) -> UserResponse:
    return UserResponse(id=str(user.id), email=user.email, role=user.role)


def register_user(db: Session, credentials: Credentials) -> User:
    """Create a new user account.

    Args:
        db: Database session
        credentials: Validated credentials with a normalized email

    Returns:
        User: The stored user

    Raises:
        EmailInUse: If an account already exists for the email
        InternalError: If the store or the password hasher fails
    """
    try:
        existing_user = db.query(User).filter(User.email == credentials.email).first()
        if existing_user is not None:
            raise EmailInUse()

        new_user = User(
            id=uuid4(),
            email=credentials.email,
            password_hash=hash_password(credentials.password),
            role="user",
            created_at=datetime.now(timezone.utc),
        )
        db.add(new_user)
        db.commit()
        db.refresh(new_user)
    except IntegrityError:
        # Lost a race with a concurrent registration of the same email
        db.rollback()
        raise EmailInUse()
    except (SQLAlchemyError, ValueError) as e:
        db.rollback()
        logger.exception(f"Registration failed: {e}")
        raise InternalError()

    logger.info(f"Registered user {new_user.id}")
    return new_user


def authenticate_user(db: Session, credentials: Credentials) -> User:
    """Check credentials and return the matching user.

    Unknown emails and wrong passwords raise the same error.

    Raises:
        InvalidCredentials: If the email is unknown or the password is wrong
        InternalError: If the store fails
    """
    try:
        user = db.query(User).filter(User.email == credentials.email).first()
    except SQLAlchemyError as e:
        logger.exception(f"Login lookup failed: {e}")
        raise InternalError()

    password_hash = user.password_hash if user is not None else DUMMY_PASSWORD_HASH
    if not verify_password(credentials.password, password_hash) or user is None:
        logger.warning("Failed login attempt")
        raise InvalidCredentials()

    logger.info(f"User {user.id} logged in")
    return user
