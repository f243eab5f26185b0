"""
UUID creation. Groups, items and policies are keyed by uuid7, which is not
part of the python standard library as of 3.12.
"""

from uuid import UUID as UUID

from uuid_extensions import uuid7 as uuid7

__ALL__ = ["UUID", "uuid7"]
