"""
GitHub service package.

Usage: `from app.services.github import GitHubReadOperations, UpstreamError`

Module structure:
- read_operations.py: Commit, pull request and issue list calls
- http_client.py: Shared httpx client lifecycle
- helpers.py: Rate limit, pagination and error utilities
- types.py: Response page wrapper
- exceptions.py: Custom exceptions
"""

from app.services.github.exceptions import GitHubRepoRenamed, InvalidRequest, UpstreamError
from app.services.github.helpers import RateLimitInfo, handle_error_response, has_next_page
from app.services.github.http_client import close_github_client, get_github_client
from app.services.github.read_operations import GitHubReadOperations
from app.services.github.types import ListPage

__all__ = [
    # Operations
    "GitHubReadOperations",
    # HTTP client lifecycle
    "get_github_client",
    "close_github_client",
    # Utilities
    "handle_error_response",
    "has_next_page",
    "RateLimitInfo",
    # Exceptions
    "InvalidRequest",
    "UpstreamError",
    "GitHubRepoRenamed",
    # Types
    "ListPage",
]
