"""
Session management for the policy store.
"""

from sqlalchemy import Engine
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel, create_engine

from uwembargo.database.meta import ALL_TABLES


def _tables():
    return [table.__table__ for table in ALL_TABLES]


class SyncSessionManager:
    """
    A manager for synchronous sessions, used for schema setup. Expected usage:

    manager = SyncSessionManager(conn_url)
    manager.create_all()

    with manager.session() as conn:
        group = conn.get(Group, group_id)
    """

    connection_url: str
    engine: Engine
    session: sessionmaker

    def __init__(self, connection_url: str, echo: bool = False):
        self.connection_url = connection_url
        self.engine = create_engine(self.connection_url, echo=echo)
        self.session = sessionmaker(self.engine)

    def create_all(self):
        """
        Create the group, content and policy tables if they do not exist.
        """
        with self.engine.begin() as conn:
            SQLModel.metadata.create_all(conn, tables=_tables())

    def drop_all(self):
        """
        Drop the group, content and policy tables. WARNING: this deletes every
        stored grant; you probably only want this in a test.
        """
        with self.engine.begin() as conn:
            SQLModel.metadata.drop_all(conn, tables=_tables())


class AsyncSessionManager:
    """
    A manager for asynchronous sessions. The embargo workflow runs inside a
    transaction owned by the caller:

    manager = AsyncSessionManager(conn_url)

    async with manager.session() as conn:
        async with conn.begin():
            await apply_embargo(item_id=..., conn=conn, ...)
    """

    connection_url: str
    engine: AsyncEngine
    session: async_sessionmaker

    def __init__(self, connection_url: str, echo: bool = False):
        self.connection_url = connection_url
        self.engine = create_async_engine(self.connection_url, echo=echo)
        self.session = async_sessionmaker(self.engine, expire_on_commit=False)

    async def create_all(self):
        async with self.engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.create_all, tables=_tables())

    async def drop_all(self):
        async with self.engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.drop_all, tables=_tables())
