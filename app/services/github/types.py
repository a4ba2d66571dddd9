"""Data types for GitHub API responses."""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class ListPage:
    """One page of a GitHub list endpoint."""

    entries: list[dict[str, Any]] = field(default_factory=list)
    has_next_page: bool = False
    rate_limit_remaining: int | None = None
