"""Application services over the user and category repositories."""

from __future__ import annotations

import uuid

from apisample.entities import Category, User
from apisample.repository import CategoryRepository, UserRepository


class CategoryService:
    """Use cases for categories."""

    def __init__(self, category_repository: CategoryRepository) -> None:
        self._category_repository = category_repository

    def get_or_create(self, category: Category) -> Category:
        """Return the stored category matching ``category``, creating it if needed."""
        return self._category_repository.get_or_create(category)


class UserService:
    """Use cases for users."""

    def __init__(self, user_repository: UserRepository) -> None:
        self._user_repository = user_repository

    def create_user(self, user: User) -> User:
        """Assign a fresh random identifier to ``user`` and store it."""
        user.id = str(uuid.uuid4())
        return self._user_repository.create(user)

    def get_user_by_id(self, user_id: str) -> User:
        """Return the user with ``user_id``."""
        return self._user_repository.find_by_id(user_id)

    def get_user_by_email(self, email: str) -> User:
        """Return the user with ``email``."""
        return self._user_repository.find_by_email(email)

    def get_users(self) -> list[User]:
        """Return every user."""
        return self._user_repository.find_all()

    def update_user(self, user: User) -> User:
        """Apply the non-empty fields of ``user`` to the stored user."""
        return self._user_repository.save(user)

    def delete_user(self, user_id: str) -> None:
        """Remove the user with ``user_id``."""
        self._user_repository.delete(user_id)