"""
GitHub API read operations.

Provides the three list calls the timeline is built from:
- Commits on the default branch
- Pull requests (all states)
- Issues (all states, pull requests included as GitHub returns them)
"""

import logging
from typing import Any

import httpx

from app.config import settings
from app.services.github.exceptions import UpstreamError
from app.services.github.helpers import RateLimitInfo, handle_error_response, has_next_page
from app.services.github.http_client import get_github_client
from app.services.github.types import ListPage

logger = logging.getLogger(__name__)


class GitHubReadOperations:
    """
    Read-only list operations for GitHub API.

    Uses a shared HTTP client singleton for connection pooling. A token is
    optional; public repositories can be listed anonymously.
    """

    def __init__(self, token: str | None = None, base_url: str | None = None):
        self.token = token
        self.base_url = (base_url or settings.github_api_url).rstrip("/")
        # Accept and API version headers live on the shared client
        self._headers = {"Authorization": f"Bearer {token}"} if token else {}

    async def _list(
        self,
        owner: str,
        repo: str,
        resource: str,
        params: dict[str, str | int],
    ) -> ListPage:
        """GET /repos/{owner}/{repo}/{resource} and wrap the page."""
        repo_name = f"{owner}/{repo}"
        client = get_github_client()
        try:
            response = await client.get(
                f"{self.base_url}/repos/{owner}/{repo}/{resource}",
                headers=self._headers,
                params=params,
            )
        except httpx.TimeoutException as e:
            raise UpstreamError(f"GitHub API request timed out: {resource} for {repo_name}") from e
        except httpx.RequestError as e:
            raise UpstreamError(f"GitHub API request failed: {e}") from e

        handle_error_response(response, repo_name)

        try:
            data: Any = response.json()
        except ValueError as e:
            raise UpstreamError(f"Invalid JSON from GitHub for {resource} of {repo_name}") from e
        if not isinstance(data, list):
            raise UpstreamError(f"Unexpected GitHub response for {resource} of {repo_name}")

        rate_info = RateLimitInfo(response)
        page = ListPage(
            entries=data,
            has_next_page=has_next_page(response),
            rate_limit_remaining=int(rate_info.remaining) if rate_info.remaining else None,
        )
        remaining = page.rate_limit_remaining
        if remaining is not None and remaining <= settings.github_rate_limit_warning:
            logger.warning(
                f"GitHub rate limit nearly exhausted: {remaining} requests left"
                f" (resets at {rate_info.reset_timestamp})"
            )
        logger.debug(
            f"Fetched {len(page.entries)} {resource} for {repo_name} "
            f"(page={params.get('page')}, next={page.has_next_page})"
        )
        return page

    async def list_commits(
        self, owner: str, repo: str, page: int = 1, per_page: int = 30
    ) -> ListPage:
        """
        Fetch one page of commits.

        Args:
            owner: Repository owner
            repo: Repository name
            page: Page number (1-indexed)
            per_page: Items per page (max 100)

        Returns:
            ListPage of raw commit payloads
        """
        params: dict[str, str | int] = {"page": page, "per_page": min(per_page, 100)}
        return await self._list(owner, repo, "commits", params)

    async def list_pull_requests(
        self, owner: str, repo: str, page: int = 1, per_page: int = 30
    ) -> ListPage:
        """Fetch one page of pull requests in every state."""
        params: dict[str, str | int] = {
            "state": "all",
            "page": page,
            "per_page": min(per_page, 100),
        }
        return await self._list(owner, repo, "pulls", params)

    async def list_issues(
        self, owner: str, repo: str, page: int = 1, per_page: int = 30
    ) -> ListPage:
        """Fetch one page of issues in every state. GitHub mixes pull requests in."""
        params: dict[str, str | int] = {
            "state": "all",
            "page": page,
            "per_page": min(per_page, 100),
        }
        return await self._list(owner, repo, "issues", params)
