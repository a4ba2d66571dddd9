"""
Repository timeline package.

Usage: `from app.services.timeline import TimelineAggregator, TimelineAccumulator`

Module structure:
- aggregator.py: Stateless fetch/normalize/merge of one page
- accumulator.py: Session-scoped merge across pages
- analytics.py: Activity summaries over timeline items
- normalize.py: GitHub payload to TimelineItem mapping
- repo_parser.py: "owner/repo" and github.com URL parsing
- types.py: Timeline data types
"""

from app.services.timeline.accumulator import TimelineAccumulator, merge_items
from app.services.timeline.aggregator import TimelineAggregator
from app.services.timeline.analytics import ActivitySummary, summarize_activity
from app.services.timeline.repo_parser import parse_repo_string
from app.services.timeline.types import (
    ITEM_KINDS,
    TIMELINE_FILTERS,
    ItemKind,
    PaginationState,
    RepositoryIdentity,
    TimelineAuthor,
    TimelineFilter,
    TimelineItem,
    TimelineSnapshot,
)

__all__ = [
    "TimelineAggregator",
    "TimelineAccumulator",
    "merge_items",
    "ActivitySummary",
    "summarize_activity",
    "parse_repo_string",
    "ITEM_KINDS",
    "TIMELINE_FILTERS",
    "ItemKind",
    "PaginationState",
    "RepositoryIdentity",
    "TimelineAuthor",
    "TimelineFilter",
    "TimelineItem",
    "TimelineSnapshot",
]
