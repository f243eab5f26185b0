"""
Meta functionality for the database.
"""

from .content import Collection, Item
from .group import Group
from .policy import ResourcePolicy

ALL_TABLES = (
    Collection,
    Group,
    Item,
    ResourcePolicy,
)
