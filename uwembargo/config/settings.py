"""
Main settings object.
"""

from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy import URL

from uwembargo.core.group import ReservedGroup

from .managers import AsyncSessionManager, SyncSessionManager


class Settings(BaseSettings):
    database_type: Literal["sqlite", "postgres"] = "sqlite"
    database_user: str | None = None
    database_password: str | None = None
    database_port: int | None = None
    database_host: str | None = None
    database_db: str = "uwembargo.db"

    database_echo: bool = False

    # Reserved groups, resolved by name at embargo time.
    anonymous_group_name: str = "anonymous"
    institutional_group_name: str = "UW_Users"

    # Terms containing this phrase give the institutional group immediate
    # access while the public remains embargoed.
    institutional_marker: str = "Restrict to UW"

    model_config = SettingsConfigDict(env_prefix="UWEMBARGO_", env_file=".env")

    def reserved_group_name(self, role: ReservedGroup) -> str:
        match role:
            case ReservedGroup.ANONYMOUS:
                return self.anonymous_group_name
            case ReservedGroup.INSTITUTIONAL:
                return self.institutional_group_name
            case _:
                raise ValueError(f"Unknown reserved group role {role}")

    @property
    def sync_driver(self) -> str:
        match self.database_type:
            case "sqlite":
                return "sqlite"
            case "postgres":
                return "postgresql+psycopg"
            case _:
                raise ValueError

    @property
    def async_driver(self) -> str:
        match self.database_type:
            case "sqlite":
                return "sqlite+aiosqlite"
            case "postgres":
                return "postgresql+asyncpg"
            case _:
                raise ValueError

    def _uri(self, drivername: str) -> URL:
        return URL.create(
            drivername=drivername,
            username=self.database_user,
            password=self.database_password,
            host=self.database_host,
            port=self.database_port,
            database=self.database_db,
        )

    @property
    def sync_uri(self) -> URL:
        return self._uri(self.sync_driver)

    def sync_manager(self) -> SyncSessionManager:
        return SyncSessionManager(connection_url=self.sync_uri, echo=self.database_echo)

    @property
    def async_uri(self) -> URL:
        return self._uri(self.async_driver)

    def async_manager(self) -> AsyncSessionManager:
        return AsyncSessionManager(
            connection_url=self.async_uri, echo=self.database_echo
        )
