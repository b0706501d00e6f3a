"""User aggregate.

Users are created by the identity service; this engine owns only their
follow counters.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from agora.domain.model.common import DomainModel
from agora.domain.value import UserId
from agora.domain.value.types import Username


class UserStats(DomainModel):
    """Denormalized follow counters."""

    followers: int = Field(default=0, ge=0)
    following: int = Field(default=0, ge=0)


class User(DomainModel):
    """User aggregate root."""

    id: UserId
    username: Username
    name: str = Field(min_length=1, max_length=100)
    avatar_url: Optional[str] = None
    stats: UserStats = UserStats()
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)
