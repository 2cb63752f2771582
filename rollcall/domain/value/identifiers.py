"""Strongly typed identifiers.

Local records are keyed by UUID. Directory users are keyed by an opaque uid
string assigned by the directory service.
"""

from typing import NewType
from uuid import UUID

RecordId = NewType("RecordId", UUID)
UserUid = NewType("UserUid", str)
