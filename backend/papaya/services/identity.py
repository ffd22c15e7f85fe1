"""
Identity Provider

Registers users, verifies credentials against bcrypt hashes, issues bearer
tokens and turns a presented token back into a Caller.
"""

import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session, select

from papaya.errors import AlreadyRegistered, Forbidden, StoreFailure, Unauthenticated, ValidationError
from papaya.models.user import User, UserRole
from papaya.utils.guards import Caller
from papaya.utils.security import (
    MAX_PASSWORD_BYTES,
    TokenError,
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)

logger = logging.getLogger(__name__)

SELF_SERVICE_ROLES = frozenset({UserRole.jugador, UserRole.club})


def get_user_by_email(session: Session, email: str) -> Optional[User]:
    return session.exec(select(User).where(User.email == email.strip().lower())).first()


def register_user(
    session: Session,
    name: str,
    email: str,
    password: str,
    role: UserRole = UserRole.jugador,
    city: Optional[str] = None,
    level: Optional[float] = None,
    allow_privileged: bool = False,
) -> User:
    """
    Create a user with a hashed password.

    Superadmins can only be created with allow_privileged=True (seed script).

    Raises:
        ValidationError: missing name/email/password or unknown role
        Forbidden: self-registration as superadmin
        AlreadyRegistered: email already in use
        StoreFailure: database error
    """
    if not name or not name.strip() or not email or not email.strip() or not password:
        raise ValidationError("name, email and password are required")
    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValidationError(f"password must be at most {MAX_PASSWORD_BYTES} bytes")
    try:
        role = UserRole(role)
    except ValueError:
        raise ValidationError(f"Unknown role '{role}'")
    if role not in SELF_SERVICE_ROLES and not allow_privileged:
        raise Forbidden(f"Role '{role.value}' cannot be self-registered")

    email = email.strip().lower()
    if get_user_by_email(session, email):
        raise AlreadyRegistered(f"User with email {email} already exists")

    user = User(
        name=name.strip(),
        email=email,
        password_hash=hash_password(password),
        role=role,
        city=city,
        level=level,
    )
    try:
        session.add(user)
        session.commit()
        session.refresh(user)
    except IntegrityError as e:
        # Concurrent registration with the same email won the race
        session.rollback()
        raise AlreadyRegistered(f"User with email {email} already exists") from e
    except SQLAlchemyError as e:
        session.rollback()
        logger.exception("Failed to register user %s", email)
        raise StoreFailure("Failed to register user") from e

    logger.info("Registered user %d (%s) with role %s", user.id, user.email, role.value)
    return user


def authenticate_credentials(session: Session, email: str, password: str) -> User:
    """
    Verify an email/password pair.

    Raises:
        Unauthenticated: unknown email or wrong password
    """
    user = get_user_by_email(session, email or "")
    if not user or not verify_password(password or "", user.password_hash):
        logger.warning("Failed login for %s", email)
        raise Unauthenticated("Invalid email or password")
    return user


def issue_token(user: User) -> str:
    return create_access_token(user.id, UserRole(user.role).value)


def authenticate(token: Optional[str]) -> Caller:
    """
    Turn a bearer token into a Caller.

    Raises:
        Unauthenticated: missing, expired, malformed or tampered token
    """
    if not token:
        raise Unauthenticated("No token")
    try:
        claims = decode_access_token(token)
        return Caller(user_id=int(claims["sub"]), role=UserRole(claims["role"]))
    except (TokenError, ValueError, TypeError) as e:
        raise Unauthenticated("Invalid token") from e


def current_user(session: Session, caller: Caller) -> User:
    """
    Load the User behind an authenticated Caller.

    Raises:
        Unauthenticated: the token refers to a user that no longer exists
    """
    user = session.get(User, caller.user_id)
    if not user:
        raise Unauthenticated("User no longer exists")
    return user
