"""
User Model
Table structure plus the small data-access helpers used by the repositories
"""
from enum import Enum
from typing import Optional
from datetime import datetime, timezone
from sqlmodel import SQLModel, Field, Session, select


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Role(str, Enum):
    """Application roles"""
    ADMIN = "ADMIN"
    USER = "USER"
    GUEST = "GUEST"
    EXPENSE_ADMIN = "EXPENSE_ADMIN"


class User(SQLModel, table=True):
    __tablename__ = "users"

    id: Optional[int] = Field(default=None, primary_key=True)
    username: str = Field(unique=True, index=True, max_length=50)
    firstname: Optional[str] = Field(default=None, max_length=50)
    lastname: str = Field(max_length=50)
    company: Optional[str] = Field(default=None, max_length=100)
    email: Optional[str] = Field(default=None, max_length=100)

    password_hash: str
    role: str = Field(default=Role.USER.value, max_length=20)
    enabled: bool = Field(default=True)
    force_password_update: bool = Field(default=True)

    # Lockout tracking
    account_locked: bool = Field(default=False)
    failed_login_attempts: int = Field(default=0)

    created_date: datetime = Field(default_factory=utc_now)
    last_login: Optional[datetime] = None

    @classmethod
    def get_by_username(cls, db: Session, username: str) -> Optional["User"]:
        """Find a user by username"""
        return db.exec(select(cls).where(cls.username == username)).first()

    @classmethod
    def get_by_id(cls, db: Session, user_id: int) -> Optional["User"]:
        """Find a user by primary key"""
        return db.get(cls, user_id)

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN.value
