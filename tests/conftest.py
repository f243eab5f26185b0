"""
Core configuration
"""

import os

import pytest_asyncio

from uwembargo.config.settings import Settings


@pytest_asyncio.fixture(scope="session")
def database_container(tmp_path_factory):
    if not os.environ.get("UWEMBARGO_TEST_POSTGRES"):
        yield {
            "database_type": "sqlite",
            "database_db": str(tmp_path_factory.mktemp("database") / "uwembargo.db"),
        }
        return

    from testcontainers.postgres import PostgresContainer

    with PostgresContainer() as container:
        yield {
            "database_type": "postgres",
            "database_user": container.username,
            "database_password": container.password,
            "database_port": container.get_exposed_port(container.port),
            "database_host": "localhost",
            "database_db": container.dbname,
            "database_echo": True,
        }


@pytest_asyncio.fixture(scope="session")
def server_settings(database_container):
    yield Settings(
        **database_container,
        anonymous_group_name="anonymous",
        institutional_group_name="UW_Users",
        institutional_marker="Restrict to UW",
    )


@pytest_asyncio.fixture(scope="session")
def database(server_settings: Settings):
    manager = server_settings.sync_manager()
    manager.create_all()
    yield
    manager.drop_all()
