"""Tests for date and tag groupings."""

from dayboard.todos.grouping import (
    compute_groups,
    group_by_date,
    group_by_tag,
    latest_date,
    sorted_dates,
)
from dayboard.todos.types import GroupMode, Tag


class TestGroupByDate:
    def test_same_date_shares_bucket(self, todo_factory):
        a = todo_factory(1, "a", "2024-05-01")
        b = todo_factory(2, "b", "2024-05-01")
        c = todo_factory(3, "c", "2024-04-30")

        groups = group_by_date([a, b, c])

        assert groups["2024-05-01"] == [a, b]
        assert groups["2024-04-30"] == [c]

    def test_bucket_keeps_insertion_order(self, todo_factory):
        done = todo_factory(1, "z", completed=True)
        open_ = todo_factory(2, "a")
        assert group_by_date([done, open_])["2024-05-01"] == [done, open_]

    def test_empty(self):
        assert group_by_date([]) == {}


class TestSortedDates:
    def test_descending(self):
        assert sorted_dates(["2024-04-30", "2024-05-01"]) == ["2024-05-01", "2024-04-30"]

    def test_chronological_not_insertion(self):
        dates = ["2023-12-31", "2024-01-02", "2024-01-01", "2024-01-02"]
        assert sorted_dates(dates) == ["2024-01-02", "2024-01-01", "2023-12-31"]

    def test_latest_date(self, todo_factory):
        todos = [todo_factory(1, date="2024-05-01"), todo_factory(2, date="2024-05-03")]
        assert latest_date(todos) == "2024-05-03"
        assert latest_date([]) is None


class TestGroupByTag:
    def test_all_buckets_present_when_empty(self):
        groups = group_by_tag([])
        assert list(groups) == list(Tag)
        assert all(bucket == [] for bucket in groups.values())

    def test_multi_tag_membership(self, todo_factory):
        todo = todo_factory(1, tags=[Tag.FOOD, Tag.TRANSPORT])
        groups = group_by_tag([todo])

        holding = [tag for tag, bucket in groups.items() if todo in bucket]
        assert holding == [Tag.FOOD, Tag.TRANSPORT]

    def test_untagged_goes_to_other_only(self, todo_factory):
        todo = todo_factory(1)
        groups = group_by_tag([todo])

        holding = [tag for tag, bucket in groups.items() if todo in bucket]
        assert holding == [Tag.OTHER]

    def test_two_untagged(self, todo_factory):
        groups = group_by_tag([todo_factory(1), todo_factory(2)])
        counts = {tag: len(bucket) for tag, bucket in groups.items()}
        assert counts == {
            Tag.CLOTHING: 0,
            Tag.FOOD: 0,
            Tag.HOUSING: 0,
            Tag.TRANSPORT: 0,
            Tag.OTHER: 2,
        }

    def test_duplicate_tag_counted_once(self, todo_factory):
        groups = group_by_tag([todo_factory(1, tags=[Tag.FOOD, Tag.FOOD])])
        assert len(groups[Tag.FOOD]) == 1


class TestTodoGroups:
    def test_bucket_lookup(self, todo_factory):
        a = todo_factory(1, date="2024-05-01", tags=[Tag.FOOD])
        b = todo_factory(2, date="2024-04-30")
        groups = compute_groups([a, b])

        assert groups.dates == ["2024-05-01", "2024-04-30"]
        assert groups.bucket(GroupMode.DATE, "2024-04-30") == [b]
        assert groups.bucket(GroupMode.TAG, "food") == [a]
        assert groups.bucket(GroupMode.TAG, "other") == [b]

    def test_unknown_keys_are_empty(self, todo_factory):
        groups = compute_groups([todo_factory(1)])
        assert groups.bucket(GroupMode.DATE, "1999-01-01") == []
        assert groups.bucket(GroupMode.TAG, "hobby") == []
        assert groups.bucket(GroupMode.DATE, None) == []

    def test_bucket_returns_copy(self, todo_factory):
        groups = compute_groups([todo_factory(1)])
        groups.bucket(GroupMode.DATE, "2024-05-01").clear()
        assert len(groups.by_date["2024-05-01"]) == 1
