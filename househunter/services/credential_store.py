from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from househunter.core.errors import EmailAlreadyExists
from househunter.models.user import User


EMAIL_INDEX = "ix_users_email"
UNIQUE_VIOLATION = "23505"


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


def is_duplicate_email(exc: IntegrityError) -> bool:
    orig = exc.orig
    pgcode = getattr(orig, "pgcode", None)
    if pgcode is not None:
        diag = getattr(orig, "diag", None)
        return pgcode == UNIQUE_VIOLATION and getattr(diag, "constraint_name", None) == EMAIL_INDEX
    # sqlite: "UNIQUE constraint failed: users.email"
    message = str(orig)
    return "UNIQUE constraint failed" in message and "users.email" in message


class CredentialStore:
    """
    User accounts keyed by normalized email.
    Uniqueness is enforced by the unique index on users.email; insert()
    turns a violation of it into EmailAlreadyExists.
    """

    def __init__(self, db: Session):
        self.db = db

    def find_by_email(self, email: str) -> Optional[User]:
        return (
            self.db.query(User)
            .filter(User.email == normalize_email(email))
            .first()
        )

    def insert(self, user: User) -> User:
        user.email = normalize_email(user.email)
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            if is_duplicate_email(exc):
                raise EmailAlreadyExists()
            raise
        return user

    def list_all(self) -> List[User]:
        return self.db.query(User).order_by(User.created_at, User.email).all()
