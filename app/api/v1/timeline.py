"""Repository timeline endpoints: merged commits, pull requests and issues."""

from typing import Any

from fastapi import APIRouter, Depends, Query

from app.api.deps import get_timeline_aggregator
from app.config import settings
from app.services.github.exceptions import InvalidRequest
from app.services.timeline import (
    RepositoryIdentity,
    TimelineAggregator,
    TimelineFilter,
    parse_repo_string,
    summarize_activity,
)

router = APIRouter(prefix="/github", tags=["timeline"])


def _repository(owner: str | None, repo: str | None) -> RepositoryIdentity:
    if not owner or not repo:
        raise InvalidRequest("Missing owner or repo parameters")
    return RepositoryIdentity(owner=owner, name=repo)


@router.get("/timeline")
async def get_repository_timeline(
    owner: str | None = Query(None, description="Repository owner"),
    repo: str | None = Query(None, description="Repository name"),
    page: int = Query(1, ge=1),
    per_page: int = Query(
        settings.default_per_page, alias="perPage", ge=1, le=settings.max_per_page
    ),
    type_filter: TimelineFilter = Query("all", alias="filter"),
    aggregator: TimelineAggregator = Depends(get_timeline_aggregator),
) -> dict[str, Any]:
    """
    Get one page of repository activity, newest first.

    Pass page=N+1 with the same filter to load more; a changed filter should
    restart from page 1.
    """
    snapshot = await aggregator.fetch_timeline_page(
        _repository(owner, repo), page=page, per_page=per_page, type_filter=type_filter
    )
    return snapshot.to_dict()


@router.get("/timeline/activity")
async def get_repository_activity(
    owner: str | None = Query(None, description="Repository owner"),
    repo: str | None = Query(None, description="Repository name"),
    page: int = Query(1, ge=1),
    per_page: int = Query(
        settings.default_per_page, alias="perPage", ge=1, le=settings.max_per_page
    ),
    type_filter: TimelineFilter = Query("all", alias="filter"),
    top: int = Query(5, ge=1, le=50, description="Number of contributors to return"),
    aggregator: TimelineAggregator = Depends(get_timeline_aggregator),
) -> dict[str, Any]:
    """Activity breakdown (by type, by month, top contributors) for one timeline page."""
    repository = _repository(owner, repo)
    snapshot = await aggregator.fetch_timeline_page(
        repository, page=page, per_page=per_page, type_filter=type_filter
    )
    return {
        "repository": repository.to_dict(),
        "pagination": snapshot.pagination.to_dict(),
        "activity": summarize_activity(snapshot.items, top_n=top).to_dict(),
    }


@router.get("/repositories/parse")
async def parse_repository(
    q: str = Query("", description="owner/repo or a github.com URL"),
) -> dict[str, str]:
    """Validate user input without contacting GitHub."""
    repository = parse_repo_string(q)
    if repository is None:
        raise InvalidRequest(
            f"Could not parse {q!r}; use owner/repo or https://github.com/owner/repo"
        )
    return repository.to_dict()
