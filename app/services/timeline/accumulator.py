"""
Session-scoped accumulation of timeline pages.

The caller owns one TimelineAccumulator per repository browsing session.
Page 1 replaces the merged view; later pages are merged in, deduplicated by
item id (newest copy wins) and re-sorted.
"""

import asyncio
import logging

from app.services.timeline.aggregator import TimelineAggregator
from app.services.timeline.analytics import ActivitySummary, summarize_activity
from app.services.timeline.types import (
    PaginationState,
    RepositoryIdentity,
    TimelineFilter,
    TimelineItem,
    TimelineSnapshot,
    sort_newest_first,
)

logger = logging.getLogger(__name__)


def merge_items(
    prior: tuple[TimelineItem, ...], new: tuple[TimelineItem, ...]
) -> tuple[TimelineItem, ...]:
    """Union of both sequences keyed by id, later copies replacing earlier ones."""
    by_id: dict[str, TimelineItem] = {}
    for item in (*prior, *new):
        by_id[item.id] = item
    return tuple(sort_newest_first(list(by_id.values())))


class TimelineAccumulator:
    """Merged timeline view for one repository session."""

    def __init__(self, repository: RepositoryIdentity, per_page: int = 30):
        self.repository = repository
        self.per_page = per_page
        self.current_filter: TimelineFilter = "all"
        self.merged_items: tuple[TimelineItem, ...] = ()
        self.latest_pagination: PaginationState | None = None
        # Ids the latest merge added that were not already present
        self.last_page_added = 0
        self._lock = asyncio.Lock()

    @property
    def has_next_page(self) -> bool:
        return self.latest_pagination is not None and self.latest_pagination.has_next_page

    def view(self) -> TimelineSnapshot:
        """Current merged state as a snapshot."""
        pagination = self.latest_pagination or PaginationState(
            page=1, per_page=self.per_page, has_next_page=False
        )
        return TimelineSnapshot(
            repository=self.repository, items=self.merged_items, pagination=pagination
        )

    def apply_page(
        self,
        snapshot: TimelineSnapshot,
        requested_page: int,
        requested_filter: TimelineFilter,
    ) -> TimelineSnapshot:
        """
        Fold a freshly fetched snapshot into the merged view.

        Args:
            snapshot: Result of TimelineAggregator.fetch_timeline_page
            requested_page: Page the snapshot was fetched for; 1 resets state
            requested_filter: Filter the snapshot was fetched with

        Returns:
            The merged view after applying the page
        """
        if requested_page == 1:
            self.last_page_added = len(snapshot.items)
            self.merged_items = snapshot.items
        else:
            known = {item.id for item in self.merged_items}
            self.last_page_added = sum(1 for item in snapshot.items if item.id not in known)
            self.merged_items = merge_items(self.merged_items, snapshot.items)

        self.current_filter = requested_filter
        self.latest_pagination = snapshot.pagination
        logger.debug(
            f"Applied page {requested_page} ({requested_filter}) for "
            f"{self.repository.full_name}: {len(self.merged_items)} items, "
            f"{self.last_page_added} new"
        )
        return self.view()

    async def load(
        self,
        aggregator: TimelineAggregator,
        page: int = 1,
        type_filter: TimelineFilter | None = None,
    ) -> TimelineSnapshot:
        """
        Fetch a page and apply it.

        Merges are serialized per session. If the fetch raises, the merged
        state is left exactly as it was and the error propagates.
        """
        type_filter = type_filter or self.current_filter
        async with self._lock:
            snapshot = await aggregator.fetch_timeline_page(
                self.repository, page=page, per_page=self.per_page, type_filter=type_filter
            )
            return self.apply_page(snapshot, page, type_filter)

    async def load_more(self, aggregator: TimelineAggregator) -> TimelineSnapshot:
        """Fetch the page after the latest one with the current filter."""
        next_page = self.latest_pagination.page + 1 if self.latest_pagination else 1
        return await self.load(aggregator, page=next_page, type_filter=self.current_filter)

    async def change_filter(
        self, aggregator: TimelineAggregator, type_filter: TimelineFilter
    ) -> TimelineSnapshot:
        """Switch filters. Always restarts from page 1."""
        return await self.load(aggregator, page=1, type_filter=type_filter)

    def activity(self, top_n: int = 5) -> ActivitySummary:
        return summarize_activity(self.merged_items, top_n=top_n)
