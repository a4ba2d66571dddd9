"""Exceptions for the timeline service."""


class InvalidRequest(ValueError):
    """Request rejected locally before any GitHub call was made."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class UpstreamError(Exception):
    """Error from GitHub API."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        rate_limit_reset: int | None = None,
    ):
        self.message = message
        self.status_code = status_code
        self.rate_limit_reset = rate_limit_reset  # Unix timestamp when rate limit resets
        super().__init__(message)


class GitHubRepoRenamed(UpstreamError):
    """Repository has been renamed or transferred on GitHub.

    GitHub answers list calls on a moved repository with a 301. The new
    location is reported when it can be parsed from the redirect.
    """

    def __init__(self, old_full_name: str, new_full_name: str | None = None):
        self.old_full_name = old_full_name
        self.new_full_name = new_full_name

        if new_full_name:
            message = f"Repository renamed: {old_full_name} → {new_full_name}"
        else:
            message = f"Repository {old_full_name} was moved"

        super().__init__(message, status_code=301)
