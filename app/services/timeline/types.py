"""Data types for the aggregated repository timeline."""

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any, Literal

ItemKind = Literal["commit", "pull_request", "issue"]
TimelineFilter = Literal["all", "commit", "pull_request", "issue"]

ITEM_KINDS: tuple[ItemKind, ...] = ("commit", "pull_request", "issue")
TIMELINE_FILTERS: tuple[TimelineFilter, ...] = ("all", *ITEM_KINDS)

# Items without a usable timestamp sort after everything else (newest first)
UNDATED = datetime.min.replace(tzinfo=UTC)


@dataclass(frozen=True)
class RepositoryIdentity:
    """GitHub repository coordinates."""

    owner: str
    name: str

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"

    def to_dict(self) -> dict[str, str]:
        return {"owner": self.owner, "repo": self.name}


@dataclass(frozen=True)
class TimelineAuthor:
    login: str
    avatar_url: str = ""


@dataclass(frozen=True)
class TimelineItem:
    """Unified timeline entry for a commit, pull request or issue."""

    id: str  # commit SHA, "pr-{id}" or "issue-{id}"
    kind: ItemKind
    title: str
    url: str
    created_at: str  # ISO 8601, "" when upstream had no date
    author: TimelineAuthor

    # Pull request / issue fields
    state: str | None = None
    number: int | None = None

    @property
    def timestamp(self) -> datetime:
        """Parsed created_at. Missing or malformed dates map to datetime.min."""
        return parse_timestamp(self.created_at)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.id,
            "type": self.kind,
            "title": self.title,
            "url": self.url,
            "createdAt": self.created_at,
            "author": {"login": self.author.login, "avatarUrl": self.author.avatar_url},
        }
        if self.kind != "commit":
            data["state"] = self.state
            data["number"] = self.number
        return data


@dataclass(frozen=True)
class PaginationState:
    page: int
    per_page: int
    has_next_page: bool

    def to_dict(self) -> dict[str, Any]:
        return {
            "page": self.page,
            "perPage": self.per_page,
            "hasNextPage": self.has_next_page,
        }


@dataclass(frozen=True)
class TimelineSnapshot:
    """One immutable page of aggregated timeline data."""

    repository: RepositoryIdentity
    items: tuple[TimelineItem, ...]
    pagination: PaginationState

    def to_dict(self) -> dict[str, Any]:
        return {
            "repository": self.repository.to_dict(),
            "items": [item.to_dict() for item in self.items],
            "pagination": self.pagination.to_dict(),
        }


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO 8601 timestamp into an aware datetime."""
    if not value:
        return UNDATED
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return UNDATED
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def sort_newest_first(items: list[TimelineItem]) -> list[TimelineItem]:
    """Sort by creation time descending.

    sorted() is stable even with reverse=True, so equal timestamps keep
    their input order.
    """
    return sorted(items, key=lambda item: item.timestamp, reverse=True)
