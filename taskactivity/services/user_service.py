"""
User business logic: lookups, updates, credential checks and lockout bookkeeping
"""
import logging
import re
from typing import Optional

from taskactivity.core.config import settings
from taskactivity.core.security import hash_password, verify_password
from taskactivity.models import User, Role
from taskactivity.models.user_model import utc_now
from taskactivity.repositories import UserRepository

logger = logging.getLogger(__name__)

USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 50


class UserService:
    """Service for user accounts"""

    def __init__(self, user_repo: UserRepository):
        self.user_repo = user_repo

    def get_user_by_id(self, user_id: Optional[int]) -> Optional[User]:
        logger.debug(f"Retrieving user by ID: {user_id}")
        if user_id is None:
            raise ValueError("User ID cannot be null")
        return self.user_repo.find_by_id(user_id)

    def get_user_by_username(self, username: Optional[str]) -> Optional[User]:
        logger.debug(f"Retrieving user by username: {username}")
        if not username or not username.strip():
            raise ValueError("Username cannot be null or empty")
        return self.user_repo.find_by_username(username)

    def create_user(
        self,
        username: str,
        password: str,
        lastname: str,
        role: Role = Role.USER,
        firstname: Optional[str] = None,
        company: Optional[str] = None,
        email: Optional[str] = None,
        force_password_update: bool = True
    ) -> User:
        logger.info(f"Attempting to create new user: {username}")

        if not username or not username.strip():
            raise ValueError("Username cannot be null or empty")
        if not password or not password.strip():
            raise ValueError("Password cannot be null or empty")
        if not lastname or not lastname.strip():
            raise ValueError("Last name cannot be null or empty")
        if not USERNAME_MIN_LENGTH <= len(username) <= USERNAME_MAX_LENGTH:
            raise ValueError(
                f"Username must be between {USERNAME_MIN_LENGTH} and {USERNAME_MAX_LENGTH} characters"
            )
        if self.user_repo.exists_by_username(username):
            logger.warning(f"Attempt to create user with existing username: {username}")
            raise ValueError("Username already exists")

        user = User(
            username=username,
            password_hash=hash_password(password),
            role=Role(role).value,
            firstname=firstname,
            lastname=lastname,
            company=company,
            email=email,
            force_password_update=force_password_update,
        )
        saved = self.user_repo.save(user)
        logger.info(f"Successfully created new user: {username} with role: {saved.role}")
        return saved

    def update_user(self, user: Optional[User]) -> User:
        if user is None:
            raise ValueError("User cannot be null")
        if user.id is None:
            raise ValueError("User ID cannot be null for update operation")

        logger.info(f"Updating user: {user.username}")
        if not self.user_repo.exists_by_id(user.id):
            logger.warning(f"Attempt to update non-existent user with ID: {user.id}")
            raise ValueError("User not found for update")

        updated = self.user_repo.save(user)
        logger.info(f"Successfully updated user: {user.username}")
        return updated

    def authenticate(self, username: str, password: str) -> Optional[User]:
        """
        Return the user when the credentials match, otherwise None.
        Locked or disabled accounts are returned as-is so the caller can tell them apart.
        """
        if not username or not password:
            return None
        user = self.user_repo.find_by_username(username)
        if user is None or not verify_password(password, user.password_hash):
            return None
        return user

    def record_successful_login(self, user: User) -> User:
        user.last_login = utc_now()
        user.failed_login_attempts = 0
        return self.user_repo.save(user)

    def record_failed_login(self, username: str) -> Optional[User]:
        """Increment failed attempts and lock the account at the configured threshold"""
        user = self.user_repo.find_by_username(username) if username else None
        if user is None:
            return None

        user.failed_login_attempts += 1
        if user.failed_login_attempts >= settings.MAX_LOGIN_ATTEMPTS and not user.account_locked:
            user.account_locked = True
            logger.warning(
                f"User '{username}' account locked after {user.failed_login_attempts} failed login attempts"
            )
        return self.user_repo.save(user)

    @staticmethod
    def display_name(user: User) -> str:
        """'First Last (username)' with runs of whitespace collapsed"""
        firstname = user.firstname or ""
        lastname = user.lastname or ""
        name = f"{firstname} {lastname} ({user.username})".strip()
        return re.sub(r"\s+", " ", name)
