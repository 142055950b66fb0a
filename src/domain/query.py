"""Pure filter/sort/group helpers over an in-memory list of todos.

Nothing here touches the filesystem. Sort direction for the creation-time
fallback is a caller choice: the grouped listing shows newest first, the
single-day view oldest first.
"""

from collections.abc import Iterable
from datetime import datetime, timezone
from functools import cmp_to_key

from domain.entities.todo import TIME_OF_DAY_RE, Todo, parse_timestamp

UNCATEGORIZED = "uncategorized"

_EPOCH = datetime.fromtimestamp(0, tz=timezone.utc)


def parse_time(value: str | None) -> int | None:
    """Minutes since midnight for "H:MM"/"HH:MM"; None for anything else."""
    if not value:
        return None
    match = TIME_OF_DAY_RE.match(value)
    if not match:
        return None
    return int(match.group(1)) * 60 + int(match.group(2))


def filter_by_project(todos: Iterable[Todo], project: str) -> list[Todo]:
    return [t for t in todos if t.project == project]


def filter_by_status(todos: Iterable[Todo], status: str) -> list[Todo]:
    return [t for t in todos if t.status == status]


def filter_by_date(todos: Iterable[Todo], date_key: str) -> list[Todo]:
    return [t for t in todos if t.date_key == date_key]


def group_by_date(todos: Iterable[Todo]) -> dict[str, list[Todo]]:
    """Group by derived date key, preserving insertion order in each group."""
    groups: dict[str, list[Todo]] = {}
    for todo in todos:
        groups.setdefault(todo.date_key, []).append(todo)
    return groups


def group_by_project(todos: Iterable[Todo]) -> dict[str, list[Todo]]:
    groups: dict[str, list[Todo]] = {}
    for todo in todos:
        groups.setdefault(todo.project or UNCATEGORIZED, []).append(todo)
    return groups


def sorted_date_keys(keys: Iterable[str], newest_first: bool = False) -> list[str]:
    """YYYY-MM-DD keys are zero-padded, so string order is chronological."""
    return sorted(keys, reverse=newest_first)


def _created_at(todo: Todo) -> datetime:
    return parse_timestamp(todo.created) or _EPOCH


def _compare_optional(a: int | None, b: int | None) -> int | None:
    """Order two optional minute values; None when neither is set."""
    if a is not None and b is not None:
        return a - b
    if a is not None:
        return -1
    if b is not None:
        return 1
    return None


def sort_by_time(todos: Iterable[Todo], newest_first: bool = False) -> list[Todo]:
    """Sort by start time, then end time, then creation time.

    Records with a parseable start come first (ascending). Records without
    one are ordered by end the same way. Only when neither has a start nor an
    end does creation time decide, in the direction given by `newest_first`.
    """

    def compare(a: Todo, b: Todo) -> int:
        for attr in ("start", "end"):
            result = _compare_optional(parse_time(getattr(a, attr)), parse_time(getattr(b, attr)))
            if result is not None:
                return result
        a_created, b_created = _created_at(a), _created_at(b)
        if a_created == b_created:
            return 0
        ascending = -1 if a_created < b_created else 1
        return -ascending if newest_first else ascending

    return sorted(todos, key=cmp_to_key(compare))


def sort_by_created(todos: Iterable[Todo], newest_first: bool = True) -> list[Todo]:
    return sorted(todos, key=_created_at, reverse=newest_first)


def build_agenda(
    todos: Iterable[Todo], newest_first: bool = False
) -> list[tuple[str, list[tuple[str, list[Todo]]]]]:
    """Date groups, each split into project groups sorted by name.

    Todos inside a project group are sorted by time of day.
    """
    by_date = group_by_date(todos)
    agenda = []
    for key in sorted_date_keys(by_date, newest_first=newest_first):
        projects = group_by_project(by_date[key])
        agenda.append(
            (
                key,
                [
                    (name, sort_by_time(projects[name], newest_first=newest_first))
                    for name in sorted(projects)
                ],
            )
        )
    return agenda
