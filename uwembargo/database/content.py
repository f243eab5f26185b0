"""
Collections and the items deposited into them.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import Column, DateTime
from sqlmodel import Field, Relationship, SQLModel

from uwembargo.core.uuid import UUID, uuid7


class Collection(SQLModel, table=True):
    collection_id: UUID = Field(primary_key=True, default_factory=uuid7)

    collection_name: str
    created_at: datetime = Field(sa_column=Column(DateTime(timezone=True)))

    items: list["Item"] = Relationship(back_populates="owning_collection")


class Item(SQLModel, table=True):
    item_id: UUID = Field(primary_key=True, default_factory=uuid7)

    title: str
    created_at: datetime = Field(sa_column=Column(DateTime(timezone=True)))

    # Items inherit their initial read policies from this collection, so it is
    # the container consulted when an embargo is applied.
    owning_collection_id: UUID = Field(
        foreign_key="collection.collection_id", ondelete="CASCADE"
    )
    owning_collection: Optional["Collection"] = Relationship(
        back_populates="items", sa_relationship_kwargs=dict(lazy="joined")
    )
