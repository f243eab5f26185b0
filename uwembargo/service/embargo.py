"""
Embargo policy generation.

When an item enters embargo we decide, from the groups that can read items
in its owning collection, which of them receive a grant that only starts on
the embargo date and which receive an immediate one:

- the anonymous group, if it can read the collection, is embargoed until the
  embargo date;
- the institutional group, if the terms restrict the item to the institution
  and it can read the collection, keeps immediate, unbounded access.

Any other group is left alone.
"""

from datetime import date
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession
from structlog.typing import FilteringBoundLogger

from uwembargo.config.settings import Settings
from uwembargo.core.group import GroupData, ReservedGroup
from uwembargo.core.policy import Action, PolicyDirective
from uwembargo.core.terms import EmbargoKind, MissingEmbargoTerms, classify_terms
from uwembargo.core.uuid import UUID
from uwembargo.database.policy import ResourcePolicy

from . import authorization as authorization_service
from . import content as content_service
from . import groups as groups_service
from . import policy as policy_service


class GroupResolver(Protocol):
    async def resolve(self, role: ReservedGroup) -> GroupData: ...


async def generate(
    authorized_groups: set[GroupData],
    embargo_date: date | None,
    kind: EmbargoKind | None,
    reason: str | None,
    resource_id: UUID,
    resolver: GroupResolver,
    log: FilteringBoundLogger,
) -> list[PolicyDirective]:
    """
    Decide the read directives for an item entering embargo.

    Parameters
    ----------
    authorized_groups: set[GroupData]
        Groups allowed to read items in the owning collection.
    embargo_date: date | None
        The day the embargo lifts. None means no embargo was requested.
    kind: EmbargoKind | None
        The classified embargo terms. Required whenever `embargo_date` is set.
    reason: str | None
        Stored with every directive.
    resource_id: UUID
        The item being embargoed.
    resolver: GroupResolver
        Resolves the reserved groups by role.

    Returns
    -------
    list[PolicyDirective]
        The anonymous directive (if any) followed by the institutional one
        (if any).

    Raises
    ------
    MissingEmbargoTerms
        If an embargo date is given without terms.
    groups_service.GroupNotFound
        If a reserved group is not defined.
    """
    log = log.bind(resource_id=resource_id, embargo_date=embargo_date)

    if embargo_date is None:
        await log.adebug("embargo.not_requested")
        return []

    if kind is None:
        await log.awarning("embargo.missing_terms")
        raise MissingEmbargoTerms(
            f"Embargo date {embargo_date} given for {resource_id} without terms"
        )

    log = log.bind(kind=kind.value)
    authorized_ids = {group.group_id for group in authorized_groups}
    directives = []

    anonymous = await resolver.resolve(ReservedGroup.ANONYMOUS)

    if anonymous.group_id in authorized_ids:
        directives.append(
            PolicyDirective(
                group=anonymous,
                action=Action.READ,
                embargoed_until=embargo_date,
                reason=reason,
                resource_id=resource_id,
            )
        )
        await log.ainfo("embargo.anonymous_embargoed", group_id=anonymous.group_id)
    else:
        await log.ainfo("embargo.anonymous_not_authorized")

    if kind == EmbargoKind.DELAYED_RELEASE:
        await log.ainfo("embargo.delayed_release")
        return directives

    try:
        institutional = await resolver.resolve(ReservedGroup.INSTITUTIONAL)
    except groups_service.GroupNotFound as e:
        await log.awarning("embargo.institutional_group_undefined", error=str(e))
        raise

    log = log.bind(group_id=institutional.group_id)

    if institutional.group_id in authorized_ids:
        directives.append(
            PolicyDirective(
                group=institutional,
                action=Action.READ,
                embargoed_until=None,
                reason=reason,
                resource_id=resource_id,
            )
        )
        await log.ainfo("embargo.institutional_access_granted")
    else:
        await log.ainfo("embargo.institutional_not_authorized")

    return directives


async def apply_embargo(
    item_id: UUID,
    embargo_date: date | None,
    terms: str | None,
    reason: str | None,
    settings: Settings,
    conn: AsyncSession,
    log: FilteringBoundLogger,
    today: date | None = None,
) -> list[ResourcePolicy]:
    """
    Apply an embargo to an item and persist the resulting read policies.

    Runs inside the caller's transaction; nothing is committed or rolled
    back here. A failure part way through leaves earlier writes for the
    caller's rollback.

    Raises
    ------
    content_service.ItemNotFound
        If the item does not exist.
    MissingEmbargoTerms
        If an embargo date is given without terms.
    groups_service.GroupNotFound
        If a reserved group is not defined.
    """
    log = log.bind(item_id=item_id, embargo_date=embargo_date, terms=terms)

    if embargo_date is None:
        await log.ainfo("embargo.not_requested")
        return []

    item = await content_service.read_item(item_id=item_id, conn=conn, log=log)

    authorized_groups = await authorization_service.get_authorized_groups(
        collection_id=item.owning_collection_id,
        action=Action.DEFAULT_ITEM_READ,
        conn=conn,
        log=log,
        today=today,
    )

    directives = await generate(
        authorized_groups=authorized_groups,
        embargo_date=embargo_date,
        kind=classify_terms(terms, marker=settings.institutional_marker),
        reason=reason,
        resource_id=item.item_id,
        resolver=groups_service.ReservedGroupResolver(
            settings=settings, conn=conn, log=log
        ),
        log=log,
    )

    policies = [
        await policy_service.apply_directive(directive=directive, conn=conn, log=log)
        for directive in directives
    ]

    await log.ainfo("embargo.applied", number_of_policies=len(policies))

    return policies
