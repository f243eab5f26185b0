"""
Service layer for groups.
"""

from datetime import datetime, timezone

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from structlog.typing import FilteringBoundLogger

from uwembargo.config.settings import Settings
from uwembargo.core.group import GroupData, ReservedGroup, normalize_group_name
from uwembargo.core.uuid import UUID
from uwembargo.database.group import Group
from uwembargo.database.policy import ResourcePolicy


class GroupNotFound(Exception):
    pass


class GroupExistsError(Exception):
    pass


async def create(
    group_name: str,
    conn: AsyncSession,
    log: FilteringBoundLogger,
) -> Group:
    """
    Create a new group.

    Parameters
    ----------
    group_name: str
        The new group. Stored normalised (lower case, underscores).

    Raises
    ------
    GroupExistsError
        If a group with this name already exists.
    """

    group_name = normalize_group_name(group_name)

    log = log.bind(group_name=group_name)

    try:
        group = Group(
            group_name=group_name,
            created_at=datetime.now(tz=timezone.utc),
        )
        conn.add(group)
        await conn.flush()
    except IntegrityError as e:
        log = log.bind(error=e)
        await log.ainfo("group.exists")
        raise GroupExistsError(f"Group {group_name} already exists")

    await log.ainfo("group.created", group_id=group.group_id)

    return group


async def read_by_id(
    group_id: UUID,
    conn: AsyncSession,
    log: FilteringBoundLogger,
) -> Group:
    """
    Read a group by its ID.

    Raises
    ------
    GroupNotFound
        If the group does not exist.
    """
    log = log.bind(group_id=group_id)
    result = await conn.execute(select(Group).where(Group.group_id == group_id))
    group = result.unique().scalar_one_or_none()
    if not group:
        await log.ainfo("group.not_found")
        raise GroupNotFound(f"Group with id {group_id} not found")
    await log.adebug("group.found")
    return group


async def read_by_name(
    group_name: str,
    conn: AsyncSession,
    log: FilteringBoundLogger,
) -> Group:
    """
    Read a group by its name.

    Parameters
    ----------
    group_name: str
        The name of the group to read.
    conn: AsyncSession
        The database session.
    log: FilteringBoundLogger
        Logger instance.

    Raises
    ------
    GroupNotFound
        If the group does not exist.
    """
    group_name = normalize_group_name(group_name)
    log = log.bind(group_name=group_name)
    result = await conn.execute(select(Group).where(Group.group_name == group_name))
    group = result.unique().scalar_one_or_none()
    if not group:
        await log.ainfo("group.not_found")
        raise GroupNotFound(f"Group with name {group_name} not found")
    await log.adebug("group.found")
    return group


async def delete_group(
    group_id: UUID,
    conn: AsyncSession,
    log: FilteringBoundLogger,
) -> None:
    """
    Delete a group by its ID. Policies held by the group go with it.
    """
    log = log.bind(group_id=group_id)
    await conn.execute(
        delete(ResourcePolicy).where(ResourcePolicy.group_id == group_id)
    )
    await conn.execute(delete(Group).where(Group.group_id == group_id))
    await log.ainfo("group.deleted")


async def resolve_reserved_group(
    role: ReservedGroup,
    settings: Settings,
    conn: AsyncSession,
    log: FilteringBoundLogger,
) -> GroupData:
    """
    Look up one of the reserved groups by the name configured for its role.

    Raises
    ------
    GroupNotFound
        If no group with the configured name exists. This is a configuration
        error: the reserved groups must be created before embargoes are set.
    """
    log = log.bind(role=role.value)
    group = await read_by_name(
        group_name=settings.reserved_group_name(role), conn=conn, log=log
    )
    return group.to_core()


class ReservedGroupResolver:
    """
    Resolves reserved groups against the database. Each role is looked up at
    most once per resolver, so one resolver should be used per embargo
    application.
    """

    settings: Settings
    conn: AsyncSession
    log: FilteringBoundLogger

    def __init__(
        self, settings: Settings, conn: AsyncSession, log: FilteringBoundLogger
    ):
        self.settings = settings
        self.conn = conn
        self.log = log
        self._resolved: dict[ReservedGroup, GroupData] = {}

    async def resolve(self, role: ReservedGroup) -> GroupData:
        if role not in self._resolved:
            self._resolved[role] = await resolve_reserved_group(
                role=role, settings=self.settings, conn=self.conn, log=self.log
            )

        return self._resolved[role]
