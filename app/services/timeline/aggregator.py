"""
Timeline aggregation over the three GitHub list endpoints.

One call fetches a single page of commits, pull requests and issues (or only
the collection matching the filter), normalizes them into TimelineItem,
drops pull requests from the issues list and returns them newest first.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable

from app.config import settings
from app.services.github.exceptions import InvalidRequest, UpstreamError
from app.services.github.read_operations import GitHubReadOperations
from app.services.github.types import ListPage
from app.services.timeline.normalize import (
    commit_to_item,
    is_pull_request,
    issue_to_item,
    pull_request_to_item,
)
from app.services.timeline.types import (
    ITEM_KINDS,
    TIMELINE_FILTERS,
    ItemKind,
    PaginationState,
    RepositoryIdentity,
    TimelineFilter,
    TimelineItem,
    TimelineSnapshot,
    sort_newest_first,
)

logger = logging.getLogger(__name__)

ListCall = Callable[[str, str, int, int], Awaitable[ListPage]]


def selected_kinds(type_filter: TimelineFilter) -> tuple[ItemKind, ...]:
    """Collections to request for a filter, in merge order."""
    if type_filter == "all":
        return ITEM_KINDS
    return (type_filter,)


def validate_request(
    repo: RepositoryIdentity | None, page: int, per_page: int, type_filter: str
) -> None:
    """
    Reject requests that must not reach GitHub.

    Raises:
        InvalidRequest: Missing owner/repo, bad page or page size, unknown filter
    """
    if repo is None or not repo.owner or not repo.name:
        raise InvalidRequest("Missing owner or repo parameters")
    if page < 1:
        raise InvalidRequest(f"page must be >= 1, got {page}")
    if per_page < 1 or per_page > settings.max_per_page:
        raise InvalidRequest(f"perPage must be between 1 and {settings.max_per_page}, got {per_page}")
    if type_filter not in TIMELINE_FILTERS:
        raise InvalidRequest(f"Unknown filter {type_filter!r}; expected one of {', '.join(TIMELINE_FILTERS)}")


class TimelineAggregator:
    """
    Stateless aggregation service.

    Holds only the GitHub reader; every call is independent, so one instance
    can serve concurrent requests for different repositories.
    """

    def __init__(self, reader: GitHubReadOperations):
        self.reader = reader

    def _list_call(self, kind: ItemKind) -> ListCall:
        if kind == "commit":
            return self.reader.list_commits
        if kind == "pull_request":
            return self.reader.list_pull_requests
        return self.reader.list_issues

    async def _gather_pages(
        self,
        repo: RepositoryIdentity,
        kinds: tuple[ItemKind, ...],
        page: int,
        per_page: int,
    ) -> list[ListPage]:
        """Fetch the collections concurrently; the first failure cancels the rest."""
        tasks = [
            asyncio.create_task(self._list_call(kind)(repo.owner, repo.name, page, per_page))
            for kind in kinds
        ]
        try:
            return list(await asyncio.gather(*tasks))
        except BaseException:
            for task in tasks:
                task.cancel()
            # Let cancelled siblings finish unwinding before the error propagates
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

    async def fetch_timeline_page(
        self,
        repo: RepositoryIdentity,
        page: int = 1,
        per_page: int = 30,
        type_filter: TimelineFilter = "all",
    ) -> TimelineSnapshot:
        """
        Fetch and merge one page of repository activity.

        Args:
            repo: Repository to read
            page: Page number (1-indexed), applied to every collection
            per_page: Page size, applied to every collection
            type_filter: "all" or a single item kind

        Returns:
            TimelineSnapshot with items newest first. has_next_page is True if
            any fetched collection has another page.

        Raises:
            InvalidRequest: Before any GitHub call, for malformed requests
            UpstreamError: If any GitHub call fails; no partial result is returned
        """
        validate_request(repo, page, per_page, type_filter)
        kinds = selected_kinds(type_filter)

        try:
            pages = await self._gather_pages(repo, kinds, page, per_page)
        except UpstreamError as e:
            logger.warning(f"Timeline fetch failed for {repo.full_name} page {page}: {e.message}")
            raise

        items: list[TimelineItem] = []
        for kind, result in zip(kinds, pages, strict=True):
            try:
                if kind == "commit":
                    items.extend(commit_to_item(c) for c in result.entries)
                elif kind == "pull_request":
                    items.extend(pull_request_to_item(p) for p in result.entries)
                else:
                    items.extend(
                        issue_to_item(i) for i in result.entries if not is_pull_request(i)
                    )
            except (KeyError, TypeError, AttributeError) as e:
                logger.warning(f"Malformed {kind} entry from GitHub for {repo.full_name}: {e!r}")
                raise UpstreamError(
                    f"Malformed {kind} data from GitHub for {repo.full_name}: missing or invalid {e}"
                ) from e

        pagination = PaginationState(
            page=page,
            per_page=per_page,
            has_next_page=any(result.has_next_page for result in pages),
        )
        logger.info(
            f"Aggregated {len(items)} items for {repo.full_name} "
            f"(filter={type_filter}, page={page}, next={pagination.has_next_page})"
        )
        return TimelineSnapshot(
            repository=repo,
            items=tuple(sort_newest_first(items)),
            pagination=pagination,
        )
