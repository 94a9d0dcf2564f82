"""Fetch state exposed to subscribers."""

from dataclasses import dataclass, replace
from typing import Any


@dataclass(frozen=True)
class FetchState:
    """Snapshot of an orchestrator's view of one resource.

    A new snapshot replaces the previous one on every transition, so a
    subscriber can hold on to the instance it received.
    """

    data: Any | None = None
    loading: bool = False
    error: Exception | None = None
    is_final_error: bool = False
    has_attempted: bool = False

    @property
    def is_temporary_error(self) -> bool:
        """An error is present and it is not final."""
        return self.error is not None and not self.is_final_error

    @property
    def has_error(self) -> bool:
        return self.error is not None

    def evolve(self, **changes: Any) -> "FetchState":
        """Return a copy with ``changes`` applied."""
        return replace(self, **changes)
