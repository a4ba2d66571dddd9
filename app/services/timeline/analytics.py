"""Activity analytics over timeline items."""

from collections import Counter
from collections.abc import Iterable
from dataclasses import asdict, dataclass, field
from datetime import UTC
from typing import Any

from app.services.timeline.types import ITEM_KINDS, UNDATED, TimelineItem


@dataclass
class TypeCount:
    type: str
    count: int


@dataclass
class MonthlyActivity:
    """Activity for a single calendar month."""

    month: str  # YYYY-MM
    commit: int = 0
    pull_request: int = 0
    issue: int = 0
    total: int = 0


@dataclass
class ContributorActivity:
    login: str
    avatar_url: str
    contributions: int


@dataclass
class ActivitySummary:
    total: int
    by_type: list[TypeCount] = field(default_factory=list)
    monthly: list[MonthlyActivity] = field(default_factory=list)
    contributors: list[ContributorActivity] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def summarize_activity(items: Iterable[TimelineItem], top_n: int = 5) -> ActivitySummary:
    """
    Summarize a set of timeline items.

    Monthly buckets are keyed by the UTC month of created_at and returned
    oldest first; items without a parseable date are counted in totals but
    not bucketed. Contributors are ranked by item count, ties in first-seen
    order.
    """
    items = list(items)
    kinds = Counter(item.kind for item in items)

    months: dict[str, MonthlyActivity] = {}
    for item in items:
        stamp = item.timestamp
        if stamp == UNDATED:
            continue
        key = stamp.astimezone(UTC).strftime("%Y-%m")
        bucket = months.setdefault(key, MonthlyActivity(month=key))
        setattr(bucket, item.kind, getattr(bucket, item.kind) + 1)
        bucket.total += 1

    authors: dict[str, ContributorActivity] = {}
    for item in items:
        entry = authors.get(item.author.login)
        if entry is None:
            entry = authors[item.author.login] = ContributorActivity(
                login=item.author.login, avatar_url=item.author.avatar_url, contributions=0
            )
        entry.contributions += 1
    # sorted() is stable, so equal counts stay in first-seen order
    ranked = sorted(authors.values(), key=lambda a: a.contributions, reverse=True)

    return ActivitySummary(
        total=len(items),
        by_type=[TypeCount(type=kind, count=kinds.get(kind, 0)) for kind in ITEM_KINDS],
        monthly=[months[key] for key in sorted(months)],
        contributors=ranked[:top_n],
    )
