"""UserService -- validated user management over a ``UserRepository``."""

from __future__ import annotations

from expense_kernel.domain.entities import User
from expense_kernel.domain.validators import validate_user
from expense_kernel.domain.violations import Violation
from expense_kernel.logging_config import get_logger
from expense_kernel.repositories.base import UserDraft, UserRepository
from expense_kernel.services.base import BaseService

logger = get_logger("services.user")


def _draft(name: str, email: str) -> UserDraft:
    return UserDraft(name=name.strip(), email=email.strip().lower())


class UserService(BaseService):
    """
    Create, update, delete and list users.

    Names are trimmed and emails trimmed and lower-cased before they
    reach the repository.
    """

    def __init__(self, users: UserRepository, **kwargs):
        super().__init__(**kwargs)
        self.users = users

    def validate_user(self, name: str | None, email: str | None) -> list[Violation]:
        return validate_user(name, email, self.limits)

    async def list_users(self) -> list[User]:
        with self._repository_call("user.fetch"):
            return await self.users.get_all()

    async def get_user(self, user_id: str) -> User | None:
        with self._repository_call("user.fetch", user_id):
            return await self.users.get_by_id(user_id)

    async def create_user(self, name: str, email: str) -> User:
        self._raise_if_invalid(self.validate_user(name, email))
        with self._repository_call("user.create"):
            user = await self.users.create(_draft(name, email))
        logger.info("user_created", extra={"user_id": user.id})
        return user

    async def update_user(self, user_id: str, name: str, email: str) -> User:
        self._raise_if_invalid(self.validate_user(name, email))
        with self._repository_call("user.update", user_id):
            user = await self.users.update(user_id, _draft(name, email))
        logger.info("user_updated", extra={"user_id": user_id})
        return user

    async def delete_user(self, user_id: str) -> None:
        with self._repository_call("user.delete", user_id):
            await self.users.delete(user_id)
        logger.info("user_deleted", extra={"user_id": user_id})
