"""
Resource policies: durable grants of an action on a resource to a group.
"""

from datetime import date

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, SQLModel

from uwembargo.core.policy import Action, ResourcePolicyData, ResourceType
from uwembargo.core.uuid import UUID, uuid7


class ResourcePolicy(SQLModel, table=True):
    __tablename__ = "resource_policy"
    __table_args__ = (UniqueConstraint("resource_id", "group_id", "action"),)

    policy_id: UUID = Field(primary_key=True, default_factory=uuid7)

    # Either a collection or an item, so this is not a foreign key.
    resource_id: UUID = Field(index=True)
    resource_type: ResourceType

    group_id: UUID = Field(foreign_key="group.group_id", ondelete="CASCADE")
    action: Action

    start_date: date | None = None
    end_date: date | None = None

    reason: str | None = None

    def is_active(self, on: date) -> bool:
        """
        Whether this grant is in effect on the day `on`. Both ends are
        inclusive.
        """
        return self.to_core().is_active(on)

    def to_core(self) -> ResourcePolicyData:
        return ResourcePolicyData(
            policy_id=self.policy_id,
            resource_id=self.resource_id,
            resource_type=self.resource_type,
            group_id=self.group_id,
            action=self.action,
            start_date=self.start_date,
            end_date=self.end_date,
            reason=self.reason,
        )
