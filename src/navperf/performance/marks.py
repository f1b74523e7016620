"""Named performance marks."""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Iterator, Mapping

from navperf.exceptions import MissingMarkError


def freezeDetail(detail: Mapping[str, Any] | None) -> Mapping[str, Any]:
    """Copy detail into a read-only mapping."""
    return MappingProxyType(dict(detail or {}))


@dataclass(frozen=True)
class Mark:
    """A named point on the performance timeline.

    Attributes:
        name: Mark name, unique within a generation.
        timestamp: Monotonic timestamp in milliseconds.
        detail: Descriptive data attached to the mark.
    """

    name: str
    timestamp: float
    detail: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "detail", freezeDetail(self.detail))

    def toDict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "name": self.name,
            "timestamp": self.timestamp,
            "detail": dict(self.detail),
        }


class MarkStore:
    """Table of named timestamps.

    Writing a mark under an existing name replaces the earlier entry;
    clearing the store starts a new generation.
    """

    def __init__(self):
        self._marks: dict[str, Mark] = {}

    def mark(
        self,
        name: str,
        timestamp: float,
        detail: dict[str, Any] | None = None,
    ) -> Mark:
        """Record a mark.

        Args:
            name: Mark name.
            timestamp: Timestamp in milliseconds.
            detail: Optional mark detail.

        Returns:
            The recorded Mark.
        """
        entry = Mark(name=name, timestamp=timestamp, detail=detail or {})
        self._marks[name] = entry
        return entry

    def put(self, entry: Mark) -> Mark:
        """Store an existing Mark (e.g. one reported by the platform)."""
        self._marks[entry.name] = entry
        return entry

    def get(self, name: str) -> Mark | None:
        """Get a mark by name, or None if missing."""
        return self._marks.get(name)

    def require(self, name: str) -> Mark:
        """Get a mark by name.

        Raises:
            MissingMarkError: If the mark doesn't exist.
        """
        entry = self._marks.get(name)
        if entry is None:
            raise MissingMarkError(name)
        return entry

    def clear(self, name: str | None = None) -> None:
        """Clear one mark, or all marks when name is None."""
        if name is None:
            self._marks.clear()
        else:
            self._marks.pop(name, None)

    def names(self) -> list[str]:
        """Get mark names in insertion order."""
        return list(self._marks)

    def entries(self) -> list[Mark]:
        """Get all marks ordered by timestamp."""
        return sorted(self._marks.values(), key=lambda m: m.timestamp)

    def __contains__(self, name: object) -> bool:
        return name in self._marks

    def __iter__(self) -> Iterator[Mark]:
        return iter(list(self._marks.values()))

    def __len__(self) -> int:
        return len(self._marks)
