"""
GitHub API helper utilities.

Rate limit parsing, pagination signals and error response handling shared by
the list operations.
"""

import logging
import re

import httpx

from app.services.github.exceptions import GitHubRepoRenamed, UpstreamError

logger = logging.getLogger(__name__)


class RateLimitInfo:
    """Rate limit information from GitHub API response."""

    def __init__(self, response: httpx.Response) -> None:
        self.remaining = response.headers.get("X-RateLimit-Remaining")
        self.reset = response.headers.get("X-RateLimit-Reset")

    @property
    def reset_timestamp(self) -> int | None:
        """Get reset timestamp as integer, or None if not available."""
        return int(self.reset) if self.reset else None

    @property
    def is_exhausted(self) -> bool:
        """Check if rate limit is exhausted."""
        return self.remaining is not None and int(self.remaining) == 0


def has_next_page(response: httpx.Response) -> bool:
    """True when the Link header advertises a further page."""
    link_header = response.headers.get("Link", "")
    return 'rel="next"' in link_header


def parse_redirect_location(location: str) -> tuple[str, str] | None:
    """
    Extract owner/repo from GitHub redirect Location header.

    Args:
        location: The Location header value, which can be:
            - Absolute: "https://api.github.com/repos/owner/newname/..."
            - Relative: "/repos/owner/newname/..."

    Returns:
        Tuple of (owner, repo) if parseable, None otherwise
    """
    if not location:
        return None

    match = re.match(r"(?:https://api\.github\.com)?/repos/([^/]+)/([^/?]+)", location)
    if match:
        return (match.group(1), match.group(2))

    return None


def _upstream_message(response: httpx.Response) -> str | None:
    """GitHub puts a human readable reason in the "message" field of error bodies."""
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict) and isinstance(body.get("message"), str):
        return body["message"]
    return None


def _with_detail(summary: str, response: httpx.Response) -> str:
    """Append GitHub's own error message, verbatim, when the body carries one."""
    detail = _upstream_message(response)
    return f"{summary} ({detail})" if detail else summary


def handle_error_response(response: httpx.Response, repo_name: str) -> None:
    """
    Handle common error responses from GitHub API.

    Args:
        response: The HTTP response from GitHub API
        repo_name: Repository name for error context (format: "owner/repo")

    Raises:
        GitHubRepoRenamed: If repository was renamed/transferred (301)
        UpstreamError: For authentication, authorization, or other API errors
    """
    if response.status_code == 200:
        return

    rate_info = RateLimitInfo(response)

    if response.status_code == 301:
        location = response.headers.get("Location", "")
        logger.debug(f"Got 301 redirect for {repo_name}, Location header: {location!r}")

        new_repo = parse_redirect_location(location)
        if new_repo:
            raise GitHubRepoRenamed(repo_name, f"{new_repo[0]}/{new_repo[1]}")
        raise GitHubRepoRenamed(repo_name)
    elif response.status_code == 401:
        raise UpstreamError(_with_detail("Invalid or expired GitHub token", response), 401)
    elif response.status_code == 404:
        raise UpstreamError(
            _with_detail(f"Repository or resource not found: {repo_name}", response), 404
        )
    elif response.status_code in (403, 429):
        if rate_info.is_exhausted or response.status_code == 429:
            raise UpstreamError(
                _with_detail("GitHub API rate limit exceeded", response),
                response.status_code,
                rate_limit_reset=rate_info.reset_timestamp,
            )
        raise UpstreamError(_with_detail("GitHub API forbidden", response), 403)

    raise UpstreamError(
        _with_detail(f"GitHub API error: {response.status_code}", response), response.status_code
    )
