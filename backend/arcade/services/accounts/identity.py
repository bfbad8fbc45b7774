import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from arcade import bcrypt
from arcade.errors import AuthenticationError, ConflictError, StorageError, ValidationError
from arcade.models import User

logger = logging.getLogger(__name__)

# Signed 64-bit range of an integer primary key
MIN_ID = -(2 ** 63)
MAX_ID = 2 ** 63 - 1


def parse_user_id(value: Any) -> Optional[int]:
    """Return ``value`` as a user id, or None if it cannot name a user.

    Accepts ints and ASCII decimal strings (ids arrive as path segments or
    JSON). Values outside the signed 64-bit column range name no row.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        uid = value
    elif isinstance(value, str):
        text = value.strip()
        if not text.isascii() or not text.lstrip('-').isdigit():
            return None
        uid = int(text)
    else:
        return None
    if not MIN_ID <= uid <= MAX_ID:
        return None
    return uid


class IdentityStore:
    """Users and their credentials.

    Holds the engine it was built with and opens a session per call, so
    no connection outlives the operation that needed it.
    """

    def __init__(self, engine, hasher=None):
        self.engine = engine
        self.hasher = hasher or bcrypt

    def find_by_username(self, username: str) -> Optional[Dict[str, Any]]:
        return self._find_one(User.username == username)

    def find_by_email(self, email: str) -> Optional[Dict[str, Any]]:
        return self._find_one(User.email == email)

    def get(self, user_id) -> Optional[Dict[str, Any]]:
        uid = parse_user_id(user_id)
        if uid is None:
            return None
        return self._find_one(User.id == uid)

    def register(self, username: str, email: str, password: str) -> Dict[str, Any]:
        if not username or not email or not password:
            raise ValidationError('All fields are required')

        if self.find_by_username(username):
            raise ConflictError('Username already taken')
        if self.find_by_email(email):
            raise ConflictError('Email already registered')

        now = datetime.now(timezone.utc)
        user = User(
            username=username,
            email=email,
            password_hash=self.hasher.generate_password_hash(password).decode('utf-8'),
            created_at=now,
            last_login=now,
        )
        try:
            with Session(self.engine) as session:
                with session.begin():
                    session.add(user)
                created = user.to_dict()
        except IntegrityError as exc:
            # Lost a race against a concurrent registration
            logger.info(f"[register-conflict] username={username} email={email}")
            raise ConflictError('Username or email already registered') from exc
        except SQLAlchemyError as exc:
            logger.exception(f"[register-failed] username={username}")
            raise StorageError('Failed to register user') from exc

        logger.info(f"[user-registered] user={created['id']} username={username}")
        return created

    def login(self, email: str, password: str) -> Dict[str, Any]:
        """Verify credentials and touch the user's last login time."""
        if not email or not password:
            raise ValidationError('Email and password are required')

        try:
            with Session(self.engine) as session:
                with session.begin():
                    user = session.scalars(select(User).where(User.email == email)).first()
                    if user is None or not self.hasher.check_password_hash(user.password_hash, password):
                        user = None
                    else:
                        user.last_login = datetime.now(timezone.utc)
                authenticated = user.to_dict() if user else None
        except SQLAlchemyError as exc:
            logger.exception(f"[login-failed] email={email}")
            raise StorageError('Failed to log in') from exc

        if authenticated is None:
            raise AuthenticationError('Invalid email or password')
        logger.info(f"[login] user={authenticated['id']}")
        return authenticated

    def list_users(self) -> List[Dict[str, Any]]:
        try:
            with Session(self.engine) as session:
                users = session.scalars(
                    select(User).order_by(User.created_at.desc(), User.id.desc())
                ).all()
                return [u.to_dict(include_last_login=True) for u in users]
        except SQLAlchemyError as exc:
            logger.exception("[list-users-failed]")
            raise StorageError('Failed to list users') from exc

    def _find_one(self, criterion) -> Optional[Dict[str, Any]]:
        try:
            with Session(self.engine) as session:
                user = session.scalars(select(User).where(criterion)).first()
                return user.to_dict() if user else None
        except SQLAlchemyError as exc:
            logger.exception("[user-lookup-failed]")
            raise StorageError('Failed to look up user') from exc
