from datetime import datetime, timezone

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from .models import UserORM
from ..domain.entities import Credentials, Role, User
from ..domain.errors import DuplicateEmail
from ..application.interfaces import IUserRepository


def _as_utc(value: datetime | None) -> datetime | None:
    # sqlite hands back naive datetimes even for timezone=True columns
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def to_domain(u: UserORM) -> User:
    return User(
        id=u.id,
        name=u.name,
        email=u.email,
        role=Role.normalize(u.role),
        created_at=_as_utc(u.created_at),
        last_login=_as_utc(u.last_login),
    )


class UserRepository(IUserRepository):
    def __init__(self, db: Session): self.db = db

    def get_by_email(self, email: str) -> Credentials | None:
        row = self.db.query(UserORM).filter(UserORM.email == email).first()
        return Credentials(user=to_domain(row), password_hash=row.password_hash) if row else None

    def get_by_id(self, user_id: str) -> User | None:
        row = self.db.get(UserORM, user_id)
        return to_domain(row) if row else None

    def create(self, name: str, email: str, password_hash: str, role: Role = Role.STUDENT) -> User:
        row = UserORM(name=name, email=email, password_hash=password_hash, role=role.value)
        self.db.add(row)
        try:
            self.db.commit()
        except IntegrityError as e:
            # a concurrent signup won the race on the unique email index
            self.db.rollback()
            raise DuplicateEmail(f"email already registered: {email}") from e
        self.db.refresh(row)
        return to_domain(row)

    def touch_last_login(self, user_id: str, when: datetime) -> User:
        row = self.db.get(UserORM, user_id)
        row.last_login = when
        self.db.commit(); self.db.refresh(row)
        return to_domain(row)

    def set_role(self, user_id: str, role: Role) -> User | None:
        row = self.db.get(UserORM, user_id)
        if row is None:
            return None
        row.role = role.value
        self.db.commit(); self.db.refresh(row)
        return to_domain(row)

    def list_users(self, limit: int = 50, offset: int = 0) -> list[User]:
        rows = (
            self.db.query(UserORM)
            .order_by(UserORM.created_at.desc())
            .limit(limit)
            .offset(offset)
            .all()
        )
        return [to_domain(r) for r in rows]

    def search(self, term: str) -> list[User]:
        rows = (
            self.db.query(UserORM)
            .filter(or_(UserORM.name == term, UserORM.email == term.strip().lower()))
            .order_by(UserORM.created_at)
            .all()
        )
        return [to_domain(r) for r in rows]
