"""
Service layer for collections and items.
"""

from datetime import datetime, timezone

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession
from structlog.typing import FilteringBoundLogger

from uwembargo.core.uuid import UUID
from uwembargo.database.content import Collection, Item

from . import policy as policy_service


class CollectionNotFound(Exception):
    pass


class ItemNotFound(Exception):
    pass


async def create_collection(
    collection_name: str, conn: AsyncSession, log: FilteringBoundLogger
) -> Collection:
    log = log.bind(collection_name=collection_name)

    collection = Collection(
        collection_name=collection_name,
        created_at=datetime.now(tz=timezone.utc),
    )

    conn.add(collection)
    await conn.flush()

    await log.ainfo("collection.created", collection_id=collection.collection_id)

    return collection


async def read_collection(
    collection_id: UUID, conn: AsyncSession, log: FilteringBoundLogger
) -> Collection:
    """
    Read a collection by its ID.

    Raises
    ------
    CollectionNotFound
        If the collection does not exist.
    """
    log = log.bind(collection_id=collection_id)

    result = await conn.execute(
        select(Collection).where(Collection.collection_id == collection_id)
    )
    collection = result.unique().scalar_one_or_none()

    if collection is None:
        await log.ainfo("collection.not_found")
        raise CollectionNotFound(f"Collection {collection_id} not found")

    await log.adebug("collection.found")

    return collection


async def delete_collection(
    collection_id: UUID, conn: AsyncSession, log: FilteringBoundLogger
) -> None:
    """
    Delete a collection and its items, along with every policy held on them.
    """
    log = log.bind(collection_id=collection_id)

    result = await conn.execute(
        select(Item.item_id).where(Item.owning_collection_id == collection_id)
    )
    for item_id in result.scalars().all():
        await policy_service.delete_for_resource(
            resource_id=item_id, conn=conn, log=log
        )

    await policy_service.delete_for_resource(
        resource_id=collection_id, conn=conn, log=log
    )
    await conn.execute(delete(Item).where(Item.owning_collection_id == collection_id))
    await conn.execute(
        delete(Collection).where(Collection.collection_id == collection_id)
    )
    await log.ainfo("collection.deleted")


async def create_item(
    title: str,
    owning_collection_id: UUID,
    conn: AsyncSession,
    log: FilteringBoundLogger,
) -> Item:
    """
    Deposit a new item into a collection.

    Raises
    ------
    CollectionNotFound
        If the owning collection does not exist.
    """
    log = log.bind(title=title, owning_collection_id=owning_collection_id)

    collection = await read_collection(
        collection_id=owning_collection_id, conn=conn, log=log
    )

    item = Item(
        title=title,
        created_at=datetime.now(tz=timezone.utc),
        owning_collection_id=collection.collection_id,
        owning_collection=collection,
    )

    conn.add(item)
    await conn.flush()

    await log.ainfo("item.created", item_id=item.item_id)

    return item


async def read_item(
    item_id: UUID, conn: AsyncSession, log: FilteringBoundLogger
) -> Item:
    """
    Read an item by its ID.

    Raises
    ------
    ItemNotFound
        If the item does not exist.
    """
    log = log.bind(item_id=item_id)

    result = await conn.execute(select(Item).where(Item.item_id == item_id))
    item = result.unique().scalar_one_or_none()

    if item is None:
        await log.ainfo("item.not_found")
        raise ItemNotFound(f"Item {item_id} not found")

    await log.adebug("item.found")

    return item


async def delete_item(
    item_id: UUID, conn: AsyncSession, log: FilteringBoundLogger
) -> None:
    """
    Delete an item along with the policies held on it.
    """
    log = log.bind(item_id=item_id)
    await policy_service.delete_for_resource(resource_id=item_id, conn=conn, log=log)
    await conn.execute(delete(Item).where(Item.item_id == item_id))
    await log.ainfo("item.deleted")
