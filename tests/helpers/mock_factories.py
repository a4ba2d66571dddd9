"""Factories for GitHub API payloads and timeline items.

Payloads mirror the fields the list endpoints return that the timeline reads;
everything else GitHub sends is left out.
"""

from __future__ import annotations

from typing import Any

import httpx

from app.services.timeline.types import TimelineAuthor, TimelineItem


def make_response(
    status_code: int = 200,
    json_data: object = None,
    headers: dict[str, str] | None = None,
) -> httpx.Response:
    """Build a fake httpx.Response with the given status, JSON body, and headers."""
    return httpx.Response(
        status_code=status_code,
        json=json_data,
        headers=headers or {},
    )


NEXT_LINK = '<https://api.github.com/repositories/1/commits?page=2>; rel="next"'


def make_commit(sha: str, date: str | None = "2026-01-10T12:00:00Z", **overrides: Any) -> dict:
    commit: dict[str, Any] = {
        "sha": sha,
        "html_url": f"https://github.com/owner/repo/commit/{sha}",
        "commit": {
            "message": overrides.pop("message", f"Commit {sha}\n\nLonger body"),
            "author": {"name": "Ada Lovelace", "date": date},
            "committer": {"name": "GitHub", "date": overrides.pop("committer_date", date)},
        },
        "author": {"login": "ada", "avatar_url": "https://avatars.example/ada"},
    }
    commit.update(overrides)
    return commit


def make_pull(github_id: int, number: int, created_at: str, **overrides: Any) -> dict:
    pull: dict[str, Any] = {
        "id": github_id,
        "number": number,
        "title": f"PR #{number}",
        "html_url": f"https://github.com/owner/repo/pull/{number}",
        "state": "open",
        "created_at": created_at,
        "user": {"login": "grace", "avatar_url": "https://avatars.example/grace"},
    }
    pull.update(overrides)
    return pull


def make_issue(
    github_id: int, number: int, created_at: str, is_pr: bool = False, **overrides: Any
) -> dict:
    issue: dict[str, Any] = {
        "id": github_id,
        "number": number,
        "title": f"Issue #{number}",
        "html_url": f"https://github.com/owner/repo/issues/{number}",
        "state": "closed",
        "created_at": created_at,
        "user": {"login": "linus", "avatar_url": "https://avatars.example/linus"},
    }
    if is_pr:
        issue["pull_request"] = {"url": f"https://api.github.com/repos/owner/repo/pulls/{number}"}
    issue.update(overrides)
    return issue


def make_item(
    item_id: str,
    created_at: str,
    kind: str = "commit",
    login: str = "ada",
    title: str | None = None,
) -> TimelineItem:
    return TimelineItem(
        id=item_id,
        kind=kind,  # type: ignore[arg-type]
        title=title or item_id,
        url=f"https://github.com/owner/repo/{item_id}",
        created_at=created_at,
        author=TimelineAuthor(login=login),
        state=None if kind == "commit" else "open",
        number=None if kind == "commit" else 1,
    )
