"""User model."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from greatsage.db.base import BaseModel


class User(BaseModel):
    """Owner of every other record. There is a single user in practice."""

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    name: Mapped[str | None] = mapped_column(String(255), nullable=True)

    def __repr__(self) -> str:
        return f"<User {self.email}>"
