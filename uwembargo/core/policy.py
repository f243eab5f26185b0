"""
Core policy data models.
"""

import enum
from datetime import date

from pydantic import BaseModel, ConfigDict

from uwembargo.core.group import GroupData
from uwembargo.core.uuid import UUID


class Action(str, enum.Enum):
    READ = "read"
    # Held on collections: the read grant that items deposited there inherit.
    DEFAULT_ITEM_READ = "default_item_read"


class ResourceType(str, enum.Enum):
    COLLECTION = "collection"
    ITEM = "item"


class PolicyDirective(BaseModel):
    """
    An instruction to create (or update) a read grant for one group on one
    resource.

    `embargoed_until` is either the embargo date, in which case the grant
    only takes effect once that date arrives, or None, in which case the
    grant is effective immediately and never lifts.
    """

    model_config = ConfigDict(frozen=True)

    group: GroupData
    action: Action = Action.READ
    embargoed_until: date | None
    reason: str | None
    resource_id: UUID

    @property
    def is_bounded(self) -> bool:
        return self.embargoed_until is not None


class ResourcePolicyData(BaseModel):
    policy_id: UUID
    resource_id: UUID
    resource_type: ResourceType
    group_id: UUID
    action: Action
    start_date: date | None
    end_date: date | None
    reason: str | None

    def is_active(self, on: date) -> bool:
        if self.start_date is not None and self.start_date > on:
            return False
        if self.end_date is not None and self.end_date < on:
            return False
        return True
