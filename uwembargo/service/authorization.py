"""
Read-only queries over the stored policies.
"""

from datetime import date

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from structlog.typing import FilteringBoundLogger

from uwembargo.core.group import GroupData
from uwembargo.core.policy import Action
from uwembargo.core.uuid import UUID
from uwembargo.database.group import Group
from uwembargo.database.policy import ResourcePolicy

from . import content as content_service


async def get_authorized_groups(
    collection_id: UUID,
    action: Action,
    conn: AsyncSession,
    log: FilteringBoundLogger,
    today: date | None = None,
) -> set[GroupData]:
    """
    Snapshot the groups currently permitted `action` on a collection.

    The snapshot is taken from the collection rather than from an item being
    embargoed, since a new item has no restricting policies of its own yet.

    Parameters
    ----------
    collection_id: UUID
        The owning collection.
    action: Action
        Typically `Action.DEFAULT_ITEM_READ`.
    today: date | None
        The day against which policy dates are checked. Defaults to the
        current date.

    Raises
    ------
    content_service.CollectionNotFound
        If the collection does not exist.
    """
    today = today or date.today()
    log = log.bind(collection_id=collection_id, action=action.value)

    await content_service.read_collection(
        collection_id=collection_id, conn=conn, log=log
    )

    result = await conn.execute(
        select(ResourcePolicy, Group)
        .join(Group, Group.group_id == ResourcePolicy.group_id)
        .where(ResourcePolicy.resource_id == collection_id)
        .where(ResourcePolicy.action == action)
    )

    authorized = {
        group.to_core() for policy, group in result.all() if policy.is_active(today)
    }

    await log.adebug(
        "authorization.snapshot",
        group_names=sorted(group.group_name for group in authorized),
    )

    return authorized


async def is_authorized(
    resource_id: UUID,
    group_id: UUID,
    action: Action,
    conn: AsyncSession,
    log: FilteringBoundLogger,
    today: date | None = None,
) -> bool:
    """
    Check whether a group holds an active grant of `action` on a resource.
    """
    today = today or date.today()
    log = log.bind(resource_id=resource_id, group_id=group_id, action=action.value)

    result = await conn.execute(
        select(ResourcePolicy)
        .where(ResourcePolicy.resource_id == resource_id)
        .where(ResourcePolicy.group_id == group_id)
        .where(ResourcePolicy.action == action)
    )

    authorized = any(policy.is_active(today) for policy in result.scalars().all())

    await log.adebug("authorization.checked", authorized=authorized)

    return authorized
