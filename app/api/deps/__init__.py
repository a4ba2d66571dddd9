"""API dependencies."""

from .github import get_github_reader, get_timeline_aggregator

__all__ = [
    "get_github_reader",
    "get_timeline_aggregator",
]
