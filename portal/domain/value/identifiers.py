"""Strongly typed identifiers for invitation entities.

Using NewType keeps invite ids and actor ids from being mixed up.
"""

from typing import NewType
from uuid import UUID

InviteId = NewType("InviteId", UUID)

# Actors are owned by the account service; we only ever see their opaque id
ActorId = NewType("ActorId", str)
