"""Unit tests for filter/sort/group helpers."""

import pytest

from domain.entities.todo import Todo
from domain.query import (
    UNCATEGORIZED,
    build_agenda,
    filter_by_date,
    filter_by_project,
    filter_by_status,
    group_by_date,
    group_by_project,
    parse_time,
    sort_by_created,
    sort_by_time,
    sorted_date_keys,
)

T0 = "2024-01-01T08:00:00.000Z"
T1 = "2024-01-01T09:00:00.000Z"
T2 = "2024-01-01T10:00:00.000Z"


class TestParseTime:
    @pytest.mark.parametrize(
        ("value", "minutes"),
        [("0:00", 0), ("8:30", 510), ("08:30", 510), ("23:59", 1439)],
    )
    def test_parses_time_of_day(self, value: str, minutes: int) -> None:
        assert parse_time(value) == minutes

    @pytest.mark.parametrize("value", [None, "", "2024-01-05", "830", "8:3", "123:00", " 8:30"])
    def test_anything_else_is_no_time(self, value: str | None) -> None:
        assert parse_time(value) is None


class TestFilters:
    def test_filter_by_project_is_exact(self) -> None:
        todos = [Todo(name="A", project="work"), Todo(name="B", project="Work"), Todo(name="C")]
        assert [t.name for t in filter_by_project(todos, "work")] == ["A"]

    def test_filter_by_status_is_exact(self) -> None:
        todos = [Todo(name="A", status="done"), Todo(name="B", status="completed"), Todo(name="C")]
        assert [t.name for t in filter_by_status(todos, "done")] == ["A"]

    def test_filter_by_date_uses_derived_key(self) -> None:
        todos = [
            Todo(name="A", date="2024-01-05"),
            Todo(name="B", created="2024-01-05T12:00:00Z"),
            Todo(name="C", date="2024-01-06"),
        ]
        assert [t.name for t in filter_by_date(todos, "2024-01-05")] == ["A", "B"]


class TestGrouping:
    def test_group_by_date_preserves_order(self) -> None:
        todos = [
            Todo(name="A", date="2024-01-02"),
            Todo(name="B", date="2024-01-01"),
            Todo(name="C", date="2024-01-02"),
        ]

        groups = group_by_date(todos)

        assert list(groups) == ["2024-01-02", "2024-01-01"]
        assert [t.name for t in groups["2024-01-02"]] == ["A", "C"]

    def test_group_by_project_uses_uncategorized_bucket(self) -> None:
        todos = [Todo(name="A", project="work"), Todo(name="B"), Todo(name="C", project="work")]

        groups = group_by_project(todos)

        assert set(groups) == {"work", UNCATEGORIZED}
        assert [t.name for t in groups[UNCATEGORIZED]] == ["B"]

    def test_sorted_date_keys(self) -> None:
        keys = ["2024-01-10", "2023-12-31", "2024-01-02"]
        assert sorted_date_keys(keys) == ["2023-12-31", "2024-01-02", "2024-01-10"]
        assert sorted_date_keys(keys, newest_first=True) == ["2024-01-10", "2024-01-02", "2023-12-31"]


class TestSortByTime:
    def test_start_then_end_then_created(self) -> None:
        a = Todo(name="A", start="09:00", created=T2)
        b = Todo(name="B", start="08:30", created=T2)
        c = Todo(name="C", end="10:00", created=T1)
        d = Todo(name="D", created=T0)

        result = sort_by_time([a, b, c, d])

        assert [t.name for t in result] == ["B", "A", "C", "D"]

    def test_date_valued_start_counts_as_no_time(self) -> None:
        a = Todo(name="A", start="2024-01-05", created=T0)
        b = Todo(name="B", start="13:00", created=T1)

        assert [t.name for t in sort_by_time([a, b])] == ["B", "A"]

    def test_equal_starts_keep_input_order(self) -> None:
        a = Todo(name="A", start="09:00", created=T2)
        b = Todo(name="B", start="9:00", created=T0)

        assert [t.name for t in sort_by_time([a, b])] == ["A", "B"]

    def test_created_direction_is_a_parameter(self) -> None:
        old = Todo(name="old", created=T0)
        new = Todo(name="new", created=T2)

        assert [t.name for t in sort_by_time([new, old])] == ["old", "new"]
        assert [t.name for t in sort_by_time([old, new], newest_first=True)] == ["new", "old"]

    def test_direction_does_not_affect_time_order(self) -> None:
        early = Todo(name="early", start="07:00", created=T0)
        late = Todo(name="late", start="18:00", created=T2)

        assert [t.name for t in sort_by_time([late, early], newest_first=True)] == ["early", "late"]


def test_sort_by_created_defaults_to_newest_first() -> None:
    todos = [Todo(name="a", created=T0), Todo(name="c", created=T2), Todo(name="b", created=T1)]
    assert [t.name for t in sort_by_created(todos)] == ["c", "b", "a"]
    assert [t.name for t in sort_by_created(todos, newest_first=False)] == ["a", "b", "c"]


def test_build_agenda_groups_by_date_then_project() -> None:
    todos = [
        Todo(name="late", date="2024-01-02", project="work", start="15:00"),
        Todo(name="home", date="2024-01-02"),
        Todo(name="early", date="2024-01-02", project="work", start="08:00"),
        Todo(name="first", date="2024-01-01", project="work"),
    ]

    agenda = build_agenda(todos)

    assert [key for key, _ in agenda] == ["2024-01-01", "2024-01-02"]
    day2 = dict(agenda[1][1])
    assert list(day2) == [UNCATEGORIZED, "work"]
    assert [t.name for t in day2["work"]] == ["early", "late"]
