"""
Repository for User rows
"""
import logging
from typing import Optional
from sqlmodel import Session

from taskactivity.models import User

logger = logging.getLogger(__name__)


class UserRepository:
    """Data access for users"""

    def __init__(self, session: Session):
        self.session = session

    def find_by_id(self, user_id: int) -> Optional[User]:
        return User.get_by_id(self.session, user_id)

    def find_by_username(self, username: str) -> Optional[User]:
        return User.get_by_username(self.session, username)

    def exists_by_id(self, user_id: int) -> bool:
        return self.find_by_id(user_id) is not None

    def exists_by_username(self, username: str) -> bool:
        return self.find_by_username(username) is not None

    def save(self, user: User) -> User:
        self.session.add(user)
        self.session.commit()
        self.session.refresh(user)
        return user
