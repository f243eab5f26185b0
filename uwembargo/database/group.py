"""
Group ORM
"""

from datetime import datetime

from sqlalchemy import Column, DateTime
from sqlmodel import Field, SQLModel

from uwembargo.core.group import GroupData
from uwembargo.core.uuid import UUID, uuid7


class Group(SQLModel, table=True):
    group_id: UUID = Field(primary_key=True, default_factory=uuid7)

    group_name: str = Field(unique=True)
    created_at: datetime = Field(sa_column=Column(DateTime(timezone=True)))

    def to_core(self) -> GroupData:
        """
        Convert this Group ORM object to a GroupData core object.
        """
        return GroupData(group_id=self.group_id, group_name=self.group_name)
