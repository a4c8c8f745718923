# 📄 File: app/modules/authentication/domain/models/base.py
# 🧭 Purpose (Layman Explanation):
# Shared foundation for every stored record (user, session, verification code): an id,
# creation/update times, and a version number that goes up with every change.
# 🧪 Purpose (Technical Summary):
# Base pydantic aggregate with UTC timestamps and an optimistic-concurrency version.
# Tracks the version the entity had when it was last loaded or persisted so repositories
# can make updates conditional on it (compare-and-swap).
# 🔗 Dependencies:
# pydantic, datetime, uuid
# 🔄 Connected Modules / Calls From:
# user.py, session.py, verification_code.py, all repository implementations

import uuid
from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, field_validator


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def new_id() -> str:
    return str(uuid.uuid4())


class AggregateRoot(BaseModel):
    """
    Base class for persisted domain entities.

    Every mutator must call ``touch()`` so ``updated_at`` and ``version``
    move forward. ``persisted_version`` is the version repositories expect
    to find in storage when the entity is next updated.
    """

    model_config = ConfigDict(
        validate_assignment=True,
        arbitrary_types_allowed=True,
    )

    id: str = Field(default_factory=new_id)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
    version: int = Field(default=1, ge=1)

    _persisted_version: Optional[int] = PrivateAttr(default=None)

    @field_validator("*", mode="after")
    @classmethod
    def ensure_utc(cls, v: Any) -> Any:
        # Storage drivers without timezone support hand back naive UTC values
        if isinstance(v, datetime) and v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v

    def touch(self) -> None:
        """Stamp a mutation: bump updated_at and version."""
        self.updated_at = utc_now()
        self.version += 1

    @property
    def persisted_version(self) -> Optional[int]:
        return self._persisted_version

    def mark_persisted(self) -> None:
        """Record that storage now holds the current version."""
        self._persisted_version = self.version

    def expected_version(self) -> int:
        """Version that must be in storage for an update to apply."""
        if self._persisted_version is not None:
            return self._persisted_version
        return self.version
