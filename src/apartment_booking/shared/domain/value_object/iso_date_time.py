from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone


@dataclass(frozen=True)
class IsoDateTime:
    """Timezone-aware timestamp serialized as ISO 8601"""

    value: datetime

    def __post_init__(self) -> None:
        if self.value.tzinfo is None:
            raise ValueError("IsoDateTime requires a timezone-aware datetime")

    @classmethod
    def from_string(cls, s: str) -> IsoDateTime:
        """Parse an ISO 8601 string"""
        try:
            dt = datetime.fromisoformat(s.replace("Z", "+00:00"))
        except ValueError as e:
            raise ValueError(f"Invalid ISO 8601 datetime: {s}") from e
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        return cls(value=dt)

    def __str__(self) -> str:
        return self.value.isoformat()

