"""
Core group data models.
"""

import enum

from pydantic import BaseModel, ConfigDict

from uwembargo.core.uuid import UUID


def normalize_group_name(group_name: str) -> str:
    return group_name.strip().lower().replace(" ", "_")


class ReservedGroup(str, enum.Enum):
    """
    Groups whose identity the embargo logic depends on. They are resolved by
    role (see `Settings.reserved_group_name`) rather than by a fixed ID.
    """

    ANONYMOUS = "anonymous"
    INSTITUTIONAL = "institutional"


class GroupData(BaseModel):
    model_config = ConfigDict(frozen=True)

    group_id: UUID
    group_name: str
