"""Domain entities persisted through SQLAlchemy."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional

from sqlalchemy import DateTime, ForeignKey, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    pass


class CategoryName(str, Enum):
    WORK = "work"
    STUDY = "study"
    PRIVATE = "private"


class InvalidCategoryNameError(ValueError):
    def __init__(self, message: str = "invalid category name") -> None:
        super().__init__(message)


class Category(Base):
    __tablename__ = "categories"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(20), unique=True, nullable=False)


class User(Base):
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(191), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    password: Mapped[str] = mapped_column(String(255), nullable=False)
    category_id: Mapped[int] = mapped_column(
        ForeignKey("categories.id", onupdate="CASCADE", ondelete="SET NULL"), nullable=False
    )
    category: Mapped[Category] = relationship()
    birth_date: Mapped[Optional[datetime]] = mapped_column(DateTime, default=None)
    profile_text: Mapped[Optional[str]] = mapped_column(Text, default=None)
    profile_pic: Mapped[Optional[str]] = mapped_column(String(255), default=None)


def validate_category_name(name: str) -> CategoryName:
    """Return ``name`` as a CategoryName, raising if it is unknown."""
    try:
        return CategoryName(name)
    except ValueError:
        raise InvalidCategoryNameError() from None


def new_category(name: str) -> Optional[Category]:
    """Build a category for ``name``, or None if the name is invalid."""
    try:
        return Category(name=validate_category_name(name).value)
    except InvalidCategoryNameError:
        return None


def new_user(name: str, email: str, password: str) -> User:
    return User(name=name, email=email, password=password)


def new_domains() -> list[type[Base]]:
    return [User, Category]