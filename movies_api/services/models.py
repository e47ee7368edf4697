"""Shared dataclasses for service layer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(slots=True)
class UpdatePlan:
    """Ordered column assignments for a partial update of one movie."""

    movie_id: str
    assignments: list[tuple[str, Any]] = field(default_factory=list)

    @property
    def params(self) -> list[Any]:
        """Bound values in statement order, the WHERE id always last."""

        return [value for _, value in self.assignments] + [self.movie_id]
