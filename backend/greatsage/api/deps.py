"""Shared API dependencies."""

from typing import Annotated

from fastapi import Depends, Query

from greatsage.config import get_settings


async def get_current_user_id(
    user_id: Annotated[int | None, Query(alias="userId", ge=1)] = None,
) -> int:
    """Resolve the acting user.

    There is no authentication; clients may name a user explicitly and
    otherwise act as the configured default user.
    """
    if user_id is not None:
        return user_id
    return get_settings().default_user_id


# Type alias for dependency injection
CurrentUserId = Annotated[int, Depends(get_current_user_id)]
