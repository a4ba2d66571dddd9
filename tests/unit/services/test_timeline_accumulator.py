"""Unit tests for TimelineAccumulator page merging."""

from __future__ import annotations

import pytest

from app.services.github.exceptions import UpstreamError
from app.services.github.types import ListPage
from app.services.timeline.accumulator import TimelineAccumulator, merge_items
from app.services.timeline.types import PaginationState, RepositoryIdentity, TimelineSnapshot
from tests.helpers.mock_factories import make_commit, make_issue, make_item

REPO = RepositoryIdentity(owner="vercel", name="next.js")


def _snapshot(*items, page: int = 1, has_next: bool = True) -> TimelineSnapshot:
    return TimelineSnapshot(
        repository=REPO,
        items=tuple(items),
        pagination=PaginationState(page=page, per_page=30, has_next_page=has_next),
    )


A = make_item("A", "2026-01-10T00:00:00Z")
B = make_item("B", "2026-01-08T00:00:00Z")
C = make_item("C", "2026-01-05T00:00:00Z")


class TestMergeItems:
    def test_later_copy_wins(self):
        stale = make_item("B", "2026-01-08T00:00:00Z", title="old title")
        fresh = make_item("B", "2026-01-08T00:00:00Z", title="new title")

        merged = merge_items((A, stale), (fresh, C))

        assert [item.id for item in merged] == ["A", "B", "C"]
        assert merged[1].title == "new title"

    def test_no_duplicate_ids(self):
        merged = merge_items((A, B, C), (C, B, A))

        assert len({item.id for item in merged}) == len(merged) == 3


class TestApplyPage:
    def test_first_page_replaces_state(self):
        acc = TimelineAccumulator(REPO)
        acc.apply_page(_snapshot(C), 1, "all")

        view = acc.apply_page(_snapshot(A, B), 1, "all")

        assert view.items == (A, B)
        assert acc.merged_items == (A, B)

    def test_load_more_with_overlap(self):
        acc = TimelineAccumulator(REPO)
        acc.apply_page(_snapshot(A, B, page=1), 1, "all")

        view = acc.apply_page(_snapshot(B, C, page=2, has_next=False), 2, "all")

        assert [item.id for item in view.items] == ["A", "B", "C"]
        assert acc.last_page_added == 1
        assert view.pagination == PaginationState(page=2, per_page=30, has_next_page=False)

    def test_later_page_resorts_globally(self):
        acc = TimelineAccumulator(REPO)
        acc.apply_page(_snapshot(A, C), 1, "all")

        view = acc.apply_page(_snapshot(B, page=2), 2, "all")

        assert [item.id for item in view.items] == ["A", "B", "C"]

    def test_empty_later_page_keeps_items(self):
        acc = TimelineAccumulator(REPO)
        acc.apply_page(_snapshot(A, B), 1, "all")

        view = acc.apply_page(_snapshot(page=2, has_next=True), 2, "all")

        assert view.items == (A, B)
        assert acc.last_page_added == 0
        assert acc.has_next_page is True

    def test_filter_change_discards_prior_items(self):
        acc = TimelineAccumulator(REPO)
        issue = make_item("issue-1", "2026-01-09T00:00:00Z", kind="issue")
        acc.apply_page(_snapshot(A, issue, B), 1, "all")

        view = acc.apply_page(_snapshot(A, page=1), 1, "commit")

        assert view.items == (A,)
        assert acc.current_filter == "commit"

    def test_snapshot_is_not_mutated(self):
        acc = TimelineAccumulator(REPO)
        first = _snapshot(A, B)
        acc.apply_page(first, 1, "all")
        acc.apply_page(_snapshot(C, page=2), 2, "all")

        assert first.items == (A, B)

    def test_view_before_any_page(self):
        view = TimelineAccumulator(REPO, per_page=50).view()

        assert view.items == ()
        assert view.pagination == PaginationState(page=1, per_page=50, has_next_page=False)


class TestLoading:
    """Fetch-and-apply through a mocked aggregator."""

    @pytest.mark.anyio
    async def test_load_more_requests_next_page(self, aggregator, mock_reader):
        mock_reader.list_commits.return_value = ListPage(
            [make_commit("c1", "2026-01-10T00:00:00Z")], True
        )
        acc = TimelineAccumulator(REPO)
        await acc.load(aggregator)

        mock_reader.list_commits.return_value = ListPage(
            [make_commit("c2", "2026-01-09T00:00:00Z")], False
        )
        view = await acc.load_more(aggregator)

        assert mock_reader.list_commits.await_args.args == ("vercel", "next.js", 2, 30)
        assert [item.id for item in view.items] == ["c1", "c2"]
        assert acc.has_next_page is False

    @pytest.mark.anyio
    async def test_change_filter_resets_to_page_one(self, aggregator, mock_reader):
        mock_reader.list_commits.return_value = ListPage(
            [make_commit("c1", "2026-01-10T00:00:00Z")], True
        )
        mock_reader.list_issues.return_value = ListPage(
            [make_issue(1, 1, "2026-01-11T00:00:00Z")], True
        )
        acc = TimelineAccumulator(REPO)
        await acc.load(aggregator)
        await acc.load_more(aggregator)

        view = await acc.change_filter(aggregator, "commit")

        assert mock_reader.list_commits.await_args.args == ("vercel", "next.js", 1, 30)
        assert [item.id for item in view.items] == ["c1"]
        assert view.pagination.page == 1

    @pytest.mark.anyio
    async def test_failed_load_more_leaves_state_intact(self, aggregator, mock_reader):
        mock_reader.list_commits.return_value = ListPage(
            [make_commit("c1", "2026-01-10T00:00:00Z")], True
        )
        acc = TimelineAccumulator(REPO)
        before = await acc.load(aggregator)

        mock_reader.list_pull_requests.side_effect = UpstreamError("GitHub API error: 502", 502)
        with pytest.raises(UpstreamError):
            await acc.load_more(aggregator)

        assert acc.merged_items == before.items
        assert acc.latest_pagination == before.pagination
        assert acc.current_filter == "all"

    @pytest.mark.anyio
    async def test_activity_over_merged_items(self, aggregator, mock_reader):
        mock_reader.list_commits.return_value = ListPage(
            [make_commit("c1", "2026-01-10T00:00:00Z"), make_commit("c2", "2026-02-10T00:00:00Z")]
        )
        acc = TimelineAccumulator(REPO)
        await acc.load(aggregator)

        summary = acc.activity()

        assert summary.total == 2
        assert [(m.month, m.commit) for m in summary.monthly] == [("2026-01", 1), ("2026-02", 1)]
