"""Unit tests for the Todo entity."""

from domain.entities.todo import (
    Todo,
    format_timestamp,
    generate_id,
    is_time_of_day,
    parse_timestamp,
    today_key,
)


class TestDateKey:
    def test_uses_date_field(self) -> None:
        assert Todo(name="A", date="2024-01-05").date_key == "2024-01-05"

    def test_strips_time_part_of_date(self) -> None:
        assert Todo(name="A", date="2024-01-05T10:00:00.000Z").date_key == "2024-01-05"

    def test_falls_back_to_created(self) -> None:
        todo = Todo(name="A", created="2024-02-01T08:00:00.000Z")
        assert todo.date_key == "2024-02-01"

    def test_created_offset_is_converted_to_utc(self) -> None:
        todo = Todo(name="A", created="2024-02-01T01:00:00+02:00")
        assert todo.date_key == "2024-01-31"

    def test_invalid_date_falls_back_to_created(self) -> None:
        todo = Todo(name="A", date="../outside", created="2024-02-01T08:00:00.000Z")
        assert todo.date_key == "2024-02-01"

    def test_from_dict_reads_wrong_types_as_strings(self) -> None:
        todo = Todo.from_dict({"id": "x", "name": 5, "start": 900, "date": 20240106, "status": 1})
        assert (todo.name, todo.start, todo.date, todo.status) == ("5", "900", "20240106", "1")

    def test_falls_back_to_today(self) -> None:
        todo = Todo.from_dict({"id": "x", "name": "A"})
        assert todo.date_key == today_key()


class TestSteps:
    def test_string_is_wrapped(self) -> None:
        assert Todo(name="A", steps="only step").steps == ["only step"]  # type: ignore[arg-type]

    def test_none_becomes_empty_list(self) -> None:
        assert Todo.from_dict({"id": "x", "name": "A", "steps": None}).steps == []

    def test_process_is_used_when_steps_missing(self) -> None:
        todo = Todo.from_dict({"id": "x", "name": "A", "process": ["a", "b"]})
        assert todo.steps == ["a", "b"]
        assert todo.extra == {"process": ["a", "b"]}

    def test_numeric_process_is_ignored(self) -> None:
        assert Todo.from_dict({"id": "x", "name": "A", "process": 40}).steps == []

    def test_steps_win_over_process(self) -> None:
        todo = Todo.from_dict({"id": "x", "name": "A", "steps": ["s"], "process": ["p"]})
        assert todo.steps == ["s"]


class TestApply:
    def test_overwrites_fields_and_restamps_updated(self) -> None:
        todo = Todo(name="A", date="2024-01-01")
        created, updated = todo.created, todo.updated

        todo.apply({"status": "completed", "name": "B"})

        assert todo.status == "completed"
        assert todo.name == "B"
        assert todo.created == created
        assert parse_timestamp(todo.updated) > parse_timestamp(updated)  # type: ignore[operator]

    def test_id_and_created_are_immutable(self) -> None:
        todo = Todo(name="A")
        original_id, created = todo.id, todo.created

        todo.apply({"id": "other", "created": "2000-01-01T00:00:00Z"})

        assert todo.id == original_id
        assert todo.created == created

    def test_updated_is_strictly_increasing_even_with_future_timestamp(self) -> None:
        todo = Todo(name="A", created="2999-01-01T00:00:00.000000Z")

        todo.apply({"status": "done"})

        assert todo.updated == "2999-01-01T00:00:00.000001Z"

    def test_unknown_keys_go_to_extra(self) -> None:
        todo = Todo(name="A")
        todo.apply({"priority": 1})
        assert todo.to_dict()["priority"] == 1

    def test_steps_are_normalized(self) -> None:
        todo = Todo(name="A")
        todo.apply({"steps": "one"})
        assert todo.steps == ["one"]


class TestHelpers:
    def test_generate_id_is_unique_and_base36(self) -> None:
        ids = {generate_id() for _ in range(200)}
        assert len(ids) == 200
        assert all(i.isalnum() and i == i.lower() for i in ids)

    def test_timestamp_round_trip_uses_z_suffix(self) -> None:
        parsed = parse_timestamp("2024-01-05T10:00:00.000Z")
        assert parsed is not None
        assert format_timestamp(parsed) == "2024-01-05T10:00:00.000000Z"

    def test_parse_timestamp_rejects_garbage(self) -> None:
        assert parse_timestamp("yesterday") is None
        assert parse_timestamp(None) is None

    def test_is_time_of_day(self) -> None:
        assert is_time_of_day("9:30")
        assert is_time_of_day("09:30")
        assert not is_time_of_day("2024-01-05")
        assert not is_time_of_day(None)

    def test_is_done(self) -> None:
        assert Todo(name="A", status="done").is_done
        assert Todo(name="A", status="completed").is_done
        assert not Todo(name="A", status="pending").is_done
        assert not Todo(name="A").is_done
