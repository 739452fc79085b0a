"""Database session dependency."""

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.teamhub.core.db import Database


def get_database(request: Request) -> Database:
    return request.app.state.database


async def get_db_session(
    database: Annotated[Database, Depends(get_database)],
) -> AsyncGenerator[AsyncSession]:
    """One session per request, opened on the application's Database."""
    async with database.session() as session:
        yield session


DBSession = Annotated[AsyncSession, Depends(get_db_session)]
