"""
Tests the collection and item service layer.
"""

import pytest

from uwembargo.core.group import ReservedGroup
from uwembargo.core.policy import Action, ResourceType
from uwembargo.service import content as content_service
from uwembargo.service import policy as policy_service


async def grant_read(resource_id, resource_type, action, group_id, conn, log):
    await policy_service.create_or_modify(
        resource_id=resource_id,
        resource_type=resource_type,
        group_id=group_id,
        action=action,
        start_date=None,
        end_date=None,
        reason=None,
        conn=conn,
        log=log,
    )


@pytest.mark.asyncio(loop_scope="session")
async def test_delete_item_removes_policies(session_manager, logger, reserved_groups):
    GROUP_ID = reserved_groups[ReservedGroup.ANONYMOUS]

    async with session_manager.session() as conn:
        async with conn.begin():
            collection = await content_service.create_collection(
                collection_name="Dissertations", conn=conn, log=logger
            )
            item = await content_service.create_item(
                title="A dissertation",
                owning_collection_id=collection.collection_id,
                conn=conn,
                log=logger,
            )
            await grant_read(
                item.item_id, ResourceType.ITEM, Action.READ, GROUP_ID, conn, logger
            )

            COLLECTION_ID = collection.collection_id
            ITEM_ID = item.item_id

    async with session_manager.session() as conn:
        async with conn.begin():
            await content_service.delete_item(item_id=ITEM_ID, conn=conn, log=logger)

    async with session_manager.session() as conn:
        async with conn.begin():
            assert (
                await policy_service.list_for_resource(
                    resource_id=ITEM_ID, conn=conn, log=logger
                )
                == []
            )

            with pytest.raises(content_service.ItemNotFound):
                await content_service.read_item(item_id=ITEM_ID, conn=conn, log=logger)

            await content_service.delete_collection(
                collection_id=COLLECTION_ID, conn=conn, log=logger
            )


@pytest.mark.asyncio(loop_scope="session")
async def test_delete_collection_removes_policies(
    session_manager, logger, reserved_groups
):
    GROUP_ID = reserved_groups[ReservedGroup.INSTITUTIONAL]

    async with session_manager.session() as conn:
        async with conn.begin():
            collection = await content_service.create_collection(
                collection_name="Dissertations", conn=conn, log=logger
            )
            await grant_read(
                collection.collection_id,
                ResourceType.COLLECTION,
                Action.DEFAULT_ITEM_READ,
                GROUP_ID,
                conn,
                logger,
            )

            ITEM_IDS = []
            for title in ["First", "Second"]:
                item = await content_service.create_item(
                    title=title,
                    owning_collection_id=collection.collection_id,
                    conn=conn,
                    log=logger,
                )
                await grant_read(
                    item.item_id, ResourceType.ITEM, Action.READ, GROUP_ID, conn, logger
                )
                ITEM_IDS.append(item.item_id)

            COLLECTION_ID = collection.collection_id

    async with session_manager.session() as conn:
        async with conn.begin():
            await content_service.delete_collection(
                collection_id=COLLECTION_ID, conn=conn, log=logger
            )

    async with session_manager.session() as conn:
        async with conn.begin():
            for resource_id in [COLLECTION_ID, *ITEM_IDS]:
                assert (
                    await policy_service.list_for_resource(
                        resource_id=resource_id, conn=conn, log=logger
                    )
                    == []
                )

            with pytest.raises(content_service.CollectionNotFound):
                await content_service.read_collection(
                    collection_id=COLLECTION_ID, conn=conn, log=logger
                )
