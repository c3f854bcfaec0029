"""Persistence of users and categories through SQLAlchemy sessions."""

from __future__ import annotations

from typing import Any

from sqlalchemy import delete, inspect, select
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, noload, selectinload

from apisample.entities import Category, User


class RecordNotFoundError(LookupError):
    """Raised when a lookup matches no stored record."""

    def __init__(self, message: str = "record not found") -> None:
        super().__init__(message)


class DuplicateEmailError(ValueError):
    """Raised when a user is created with an e-mail address already in use."""

    def __init__(self, email: str) -> None:
        super().__init__(f"email already registered: {email}")
        self.email = email


def _session(engine: Engine) -> Session:
    return Session(engine, expire_on_commit=False)


def _first_or_create_category(session: Session, conditions: dict[str, Any]) -> Category:
    """Return the first category matching the non-empty ``conditions``, creating it if absent."""
    filters = {key: value for key, value in conditions.items() if value}
    statement = select(Category).filter_by(**filters).order_by(Category.id)
    category = session.scalars(statement).first()
    if category is None:
        category = Category(**filters)
        session.add(category)
        session.flush()
    return category


class CategoryRepository:
    """Stores and fetches categories."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def get_or_create(self, category: Category) -> Category:
        """Return the stored category matching ``category``, creating it if needed."""
        conditions = {"id": category.id, "name": category.name}
        with _session(self._engine) as session:
            stored = _first_or_create_category(session, conditions)
            session.commit()
        return stored


class UserRepository:
    """Stores and fetches users together with their category."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def get_or_create_category(self, user: User) -> Category:
        """Resolve the user's category by name, storing it if new, and attach it."""
        name = user.category.name if user.category is not None else ""
        with _session(self._engine) as session:
            category = _first_or_create_category(session, {"name": name})
            session.commit()
        user.category_id = category.id
        user.category = category
        return category

    def create(self, user: User) -> User:
        """Store a new user; its e-mail address must not be in use yet."""
        self.get_or_create_category(user)
        try:
            self.find_by_email(user.email)
        except RecordNotFoundError:
            pass
        else:
            raise DuplicateEmailError(user.email)
        with _session(self._engine) as session:
            session.add(user)
            session.commit()
        return user

    def _find_one(self, condition: Any) -> User:
        statement = (
            select(User)
            .options(selectinload(User.category))
            .where(condition)
            .order_by(User.id)
        )
        with _session(self._engine) as session:
            user = session.scalars(statement).first()
        if user is None:
            raise RecordNotFoundError()
        return user

    def find_by_id(self, user_id: str) -> User:
        """Return the user with ``user_id`` and its category."""
        return self._find_one(User.id == user_id)

    def find_by_email(self, email: str) -> User:
        """Return the user with ``email`` and its category."""
        return self._find_one(User.email == email)

    def find_all(self) -> list[User]:
        """Return every stored user; categories are not loaded."""
        statement = select(User).options(noload(User.category))
        with _session(self._engine) as session:
            return list(session.scalars(statement).all())

    def save(self, user: User) -> User:
        """Update the stored user with every non-empty field of ``user``."""
        selected = self.find_by_id(user.id)
        self.get_or_create_category(user)

        for prop in inspect(User).column_attrs:
            value = getattr(user, prop.key)
            nullable = prop.columns[0].nullable
            if value is None or (not nullable and value in ("", 0)):
                continue
            setattr(selected, prop.key, value)
        if user.category is not None:
            selected.category = user.category

        with _session(self._engine) as session:
            with session.begin():
                selected = session.merge(selected)
            session.refresh(selected)
            _ = selected.category
        return selected

    def delete(self, user_id: str) -> None:
        """Remove the user with ``user_id``, which must exist."""
        self.find_by_id(user_id)
        with _session(self._engine) as session:
            session.execute(delete(User).where(User.id == user_id))
            session.commit()