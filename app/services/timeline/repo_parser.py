"""Parse free-form user input into a repository identity."""

from urllib.parse import urlparse

from app.services.timeline.types import RepositoryIdentity

GITHUB_HOST = "github.com"


def parse_repo_string(value: str | None) -> RepositoryIdentity | None:
    """
    Parse "owner/repo" or a github.com URL.

    Accepted forms, first match wins:
    - exactly two non-empty "/"-separated segments: "facebook/react"
    - a github.com URL with at least two path segments:
      "https://github.com/vercel/next.js/tree/canary" (extra segments ignored)

    Returns:
        RepositoryIdentity, or None when the input matches neither form
    """
    if not value:
        return None
    text = value.strip()

    parts = text.split("/")
    if len(parts) == 2 and all(parts):
        return RepositoryIdentity(owner=parts[0], name=parts[1])

    try:
        url = urlparse(text)
    except ValueError:
        return None
    if url.scheme not in ("http", "https") or url.hostname != GITHUB_HOST:
        return None

    segments = [s for s in url.path.split("/") if s]
    if len(segments) >= 2:
        return RepositoryIdentity(owner=segments[0], name=segments[1])
    return None
