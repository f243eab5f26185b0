"""
Service layer for resource policies.
"""

from datetime import date

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession
from structlog.typing import FilteringBoundLogger

from uwembargo.core.policy import Action, PolicyDirective, ResourceType
from uwembargo.core.uuid import UUID
from uwembargo.database.policy import ResourcePolicy


async def create_or_modify(
    resource_id: UUID,
    resource_type: ResourceType,
    group_id: UUID,
    action: Action,
    start_date: date | None,
    end_date: date | None,
    reason: str | None,
    conn: AsyncSession,
    log: FilteringBoundLogger,
) -> ResourcePolicy:
    """
    Grant `action` on a resource to a group. If the group already holds a
    policy for that action on the resource, it is updated in place rather
    than duplicated, so repeated calls converge on the same grant.

    Parameters
    ----------
    resource_id: UUID
        The collection or item the grant applies to.
    resource_type: ResourceType
        Whether `resource_id` is a collection or an item.
    group_id: UUID
        The group receiving the grant.
    action: Action
        The action granted.
    start_date: date | None
        The first day the grant is in effect; None for immediately.
    end_date: date | None
        The last day the grant is in effect; None for no expiry.
    reason: str | None
        Human-readable description stored with the grant.

    Raises
    ------
    sqlalchemy.exc.SQLAlchemyError
        On any storage failure. Nothing is rolled back here; the caller owns
        the transaction.
    """
    log = log.bind(
        resource_id=resource_id,
        group_id=group_id,
        action=action.value,
        start_date=start_date,
        end_date=end_date,
    )

    result = await conn.execute(
        select(ResourcePolicy)
        .where(ResourcePolicy.resource_id == resource_id)
        .where(ResourcePolicy.group_id == group_id)
        .where(ResourcePolicy.action == action)
    )
    policy = result.scalar_one_or_none()

    if policy is None:
        policy = ResourcePolicy(
            resource_id=resource_id,
            resource_type=resource_type,
            group_id=group_id,
            action=action,
            start_date=start_date,
            end_date=end_date,
            reason=reason,
        )
        event = "policy.created"
    else:
        policy.start_date = start_date
        policy.end_date = end_date
        policy.reason = reason
        event = "policy.modified"

    conn.add(policy)
    await conn.flush()

    await log.ainfo(event, policy_id=policy.policy_id)

    return policy


async def apply_directive(
    directive: PolicyDirective, conn: AsyncSession, log: FilteringBoundLogger
) -> ResourcePolicy:
    """
    Persist an embargo directive as an item read policy. A bounded directive
    becomes a grant starting on the embargo date.
    """
    return await create_or_modify(
        resource_id=directive.resource_id,
        resource_type=ResourceType.ITEM,
        group_id=directive.group.group_id,
        action=directive.action,
        start_date=directive.embargoed_until,
        end_date=None,
        reason=directive.reason,
        conn=conn,
        log=log,
    )


async def list_for_resource(
    resource_id: UUID,
    conn: AsyncSession,
    log: FilteringBoundLogger,
    action: Action | None = None,
) -> list[ResourcePolicy]:
    log = log.bind(resource_id=resource_id)

    query = select(ResourcePolicy).where(ResourcePolicy.resource_id == resource_id)

    if action is not None:
        query = query.where(ResourcePolicy.action == action)

    result = await conn.execute(query)
    policies = list(result.scalars().all())

    await log.adebug("policy.listed", number_of_policies=len(policies))

    return policies


async def delete_for_resource(
    resource_id: UUID, conn: AsyncSession, log: FilteringBoundLogger
) -> None:
    log = log.bind(resource_id=resource_id)
    await conn.execute(
        delete(ResourcePolicy).where(ResourcePolicy.resource_id == resource_id)
    )
    await log.ainfo("policy.deleted_for_resource")
