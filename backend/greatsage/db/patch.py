"""Partial updates built from typed patch models."""

from typing import Any

from pydantic import BaseModel as PydanticModel
from sqlalchemy import Update, func, update

from greatsage.db.base import Base


def patch_values(patch: PydanticModel, **extra: Any) -> dict[str, Any]:
    """Return the explicitly set fields of ``patch`` merged with ``extra``.

    Fields the client never sent are left out, so ``None`` only reaches the
    database when it was sent on purpose (e.g. clearing a due date).
    """
    values = patch.model_dump(exclude_unset=True)
    values.update(extra)
    return values


def build_update(
    model: type[Base],
    record_id: int,
    patch: PydanticModel,
    user_id: int | None = None,
    **extra: Any,
) -> Update:
    """Build a parametrized UPDATE for one row of ``model``.

    ``extra`` carries server-side derived columns (for example
    ``completed_at`` on tasks). When ``user_id`` is given the statement only
    matches rows owned by that user.

    Raises:
        ValueError: if the patch names a column the table does not have, sets
            a NOT NULL column to None, or is empty for a table without an
            updated_at column.
    """
    values = patch_values(patch, **extra)
    columns = model.__table__.columns

    unknown = sorted(set(values) - set(columns.keys()))
    if unknown:
        raise ValueError(
            f"Unknown columns for {model.__tablename__}: {', '.join(unknown)}"
        )

    nulls = sorted(
        name for name, value in values.items()
        if value is None and not columns[name].nullable
    )
    if nulls:
        raise ValueError(
            f"Columns of {model.__tablename__} cannot be null: {', '.join(nulls)}"
        )

    if not values:
        if "updated_at" not in columns:
            raise ValueError(f"Nothing to update for {model.__tablename__}")
        values["updated_at"] = func.now()

    stmt = update(model).where(model.id == record_id)
    if user_id is not None:
        stmt = stmt.where(model.user_id == user_id)
    return stmt.values(**values)
