"""Filesystem notifications handed from the watcher to the dispatcher."""

from __future__ import annotations

import enum
from dataclasses import dataclass


class EventKind(str, enum.Enum):
    CREATED = "created"


@dataclass(slots=True, frozen=True)
class FileEvent:
    """
    One debounced batch of filesystem notifications.

    Notes:
        - ``paths`` holds absolute paths in arrival order, without duplicates.
        - Consumed exactly once by the dispatcher; never persisted.
    """

    kind: EventKind
    paths: tuple[str, ...]

    def __post_init__(self) -> None:
        if not isinstance(self.kind, EventKind):
            raise TypeError("FileEvent.kind must be an EventKind")
        if not self.paths:
            raise ValueError("FileEvent.paths must not be empty")

    @classmethod
    def created(cls, paths) -> "FileEvent":
        return cls(kind=EventKind.CREATED, paths=tuple(str(p) for p in paths))
