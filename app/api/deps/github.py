"""GitHub-backed dependencies for the timeline routes."""

from app.config import settings
from app.services.github import GitHubReadOperations
from app.services.timeline import TimelineAggregator


def get_github_reader() -> GitHubReadOperations:
    """Reader authenticated with the server-side token, if one is configured."""
    return GitHubReadOperations(settings.github_token or None)


def get_timeline_aggregator() -> TimelineAggregator:
    return TimelineAggregator(get_github_reader())
