"""Map raw GitHub list payloads onto TimelineItem."""

from typing import Any

from app.services.timeline.types import TimelineAuthor, TimelineItem

UNKNOWN_AUTHOR = "unknown"


def is_pull_request(issue: dict[str, Any]) -> bool:
    """The issues endpoint includes pull requests, marked by a "pull_request" key."""
    return issue.get("pull_request") is not None


def commit_to_item(commit: dict[str, Any]) -> TimelineItem:
    details = commit.get("commit") or {}
    git_author = details.get("author") or {}
    git_committer = details.get("committer") or {}
    account = commit.get("author") or {}

    message: str = details.get("message") or ""
    return TimelineItem(
        id=commit["sha"],
        kind="commit",
        title=message.split("\n")[0],
        url=commit.get("html_url") or "",
        created_at=git_author.get("date") or git_committer.get("date") or "",
        author=TimelineAuthor(
            login=account.get("login") or git_author.get("name") or UNKNOWN_AUTHOR,
            avatar_url=account.get("avatar_url") or "",
        ),
    )


def _numbered_item(data: dict[str, Any], kind: str, prefix: str) -> TimelineItem:
    user = data.get("user") or {}
    return TimelineItem(
        id=f"{prefix}-{data['id']}",
        kind=kind,  # type: ignore[arg-type]
        title=data.get("title") or "",
        url=data.get("html_url") or "",
        created_at=data.get("created_at") or "",
        author=TimelineAuthor(
            login=user.get("login") or UNKNOWN_AUTHOR,
            avatar_url=user.get("avatar_url") or "",
        ),
        state=data.get("state"),
        number=data.get("number"),
    )


def pull_request_to_item(pull: dict[str, Any]) -> TimelineItem:
    return _numbered_item(pull, "pull_request", "pr")


def issue_to_item(issue: dict[str, Any]) -> TimelineItem:
    return _numbered_item(issue, "issue", "issue")
