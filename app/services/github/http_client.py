"""
Pooled httpx client for the GitHub REST API.

All timeline list calls go through one AsyncClient so the commit, pull request
and issue requests of a page share keep-alive connections. Headers common to
every GitHub request are set here; the token is added per request by
GitHubReadOperations.
"""

import logging

import httpx

from app.config import settings

logger = logging.getLogger(__name__)

USER_AGENT = "repo-timeline/0.1"

_client: httpx.AsyncClient | None = None


def github_default_headers() -> dict[str, str]:
    """Headers sent with every GitHub request."""
    return {
        "Accept": "application/vnd.github+json",
        "X-GitHub-Api-Version": settings.github_api_version,
        "User-Agent": USER_AGENT,
    }


def _build_client() -> httpx.AsyncClient:
    return httpx.AsyncClient(
        headers=github_default_headers(),
        timeout=httpx.Timeout(settings.github_timeout_seconds, connect=5.0),
        limits=httpx.Limits(max_connections=20, max_keepalive_connections=10),
        http2=True,
        # 301 on a moved repository is reported, not followed
        follow_redirects=False,
    )


def get_github_client() -> httpx.AsyncClient:
    """Return the shared client, creating it on first use or after close."""
    global _client
    if _client is None or _client.is_closed:
        _client = _build_client()
        logger.debug(f"Opened GitHub client (timeout={settings.github_timeout_seconds}s)")
    return _client


async def close_github_client() -> None:
    """Close the shared client; called from the application lifespan."""
    global _client
    if _client is None:
        return
    if not _client.is_closed:
        await _client.aclose()
        logger.debug("Closed GitHub client")
    _client = None
