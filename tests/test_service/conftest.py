"""
Configuration variables and fixtures for the service layer tests.
"""

import pytest_asyncio
import structlog

from uwembargo.config.settings import Settings
from uwembargo.core.group import ReservedGroup
from uwembargo.core.policy import Action, ResourceType
from uwembargo.service import content as content_service
from uwembargo.service import groups as groups_service
from uwembargo.service import policy as policy_service


@pytest_asyncio.fixture(scope="session")
def session_manager(server_settings: Settings, database):
    yield server_settings.async_manager()


@pytest_asyncio.fixture(scope="session")
def logger():
    yield structlog.get_logger()


@pytest_asyncio.fixture(scope="session")
async def reserved_groups(session_manager, logger, server_settings):
    """
    The anonymous and institutional groups, keyed by role.
    """
    async with session_manager.session() as conn:
        async with conn.begin():
            groups = {
                role: await groups_service.create(
                    group_name=server_settings.reserved_group_name(role),
                    conn=conn,
                    log=logger,
                )
                for role in ReservedGroup
            }

            GROUP_IDS = {role: group.group_id for role, group in groups.items()}

    yield GROUP_IDS

    async with session_manager.session() as conn:
        async with conn.begin():
            for group_id in GROUP_IDS.values():
                await groups_service.delete_group(
                    group_id=group_id, conn=conn, log=logger
                )


@pytest_asyncio.fixture(scope="session")
async def collection_factory(session_manager, logger):
    """
    Creates a collection whose items may be read by the given groups, plus one
    item deposited into it. Returns (collection_id, item_id).
    """
    created = []

    async def make(*group_ids):
        async with session_manager.session() as conn:
            async with conn.begin():
                collection = await content_service.create_collection(
                    collection_name="Theses", conn=conn, log=logger
                )

                for group_id in group_ids:
                    await policy_service.create_or_modify(
                        resource_id=collection.collection_id,
                        resource_type=ResourceType.COLLECTION,
                        group_id=group_id,
                        action=Action.DEFAULT_ITEM_READ,
                        start_date=None,
                        end_date=None,
                        reason=None,
                        conn=conn,
                        log=logger,
                    )

                item = await content_service.create_item(
                    title="A thesis",
                    owning_collection_id=collection.collection_id,
                    conn=conn,
                    log=logger,
                )

                COLLECTION_ID = collection.collection_id
                ITEM_ID = item.item_id

        created.append((COLLECTION_ID, ITEM_ID))

        return COLLECTION_ID, ITEM_ID

    yield make

    async with session_manager.session() as conn:
        async with conn.begin():
            for collection_id, _ in created:
                await content_service.delete_collection(
                    collection_id=collection_id, conn=conn, log=logger
                )
