"""Todo domain entity."""

import re
import secrets
import time
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import StrEnum
from typing import Any

TIME_OF_DAY_RE = re.compile(r"^(\d{1,2}):(\d{2})$")
DATE_KEY_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")

_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"

# Fields a caller may never overwrite through an update.
IMMUTABLE_FIELDS = frozenset({"id", "created"})

_FIELD_NAMES = frozenset(
    {
        "id",
        "name",
        "description",
        "project",
        "status",
        "steps",
        "start",
        "end",
        "date",
        "created",
        "updated",
    }
)


class TodoStatus(StrEnum):
    """Conventional status labels. The store accepts any string."""

    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    DOING = "doing"
    COMPLETED = "completed"
    DONE = "done"


DONE_STATUSES = frozenset({TodoStatus.COMPLETED.value, TodoStatus.DONE.value})


def _to_base36(value: int) -> str:
    if value == 0:
        return "0"
    digits = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(_BASE36[rem])
    return "".join(reversed(digits))


def generate_id() -> str:
    """Time-prefixed base-36 token followed by random base-36 digits."""
    millis = time.time_ns() // 1_000_000
    return _to_base36(millis) + _to_base36(secrets.randbits(64))


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_timestamp(value: datetime) -> str:
    """Render a UTC timestamp as ISO-8601 with a Z suffix."""
    return value.astimezone(timezone.utc).isoformat(timespec="microseconds").replace("+00:00", "Z")


def parse_timestamp(value: str | None) -> datetime | None:
    """Parse an ISO-8601 timestamp; naive values are taken as UTC.

    Returns None for empty or unparseable input.
    """
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def today_key() -> str:
    """Today's date key (UTC)."""
    return utc_now().date().isoformat()


def normalize_steps(value: Any) -> list[str]:
    """Coerce a steps value into a list of strings."""
    if isinstance(value, list):
        return [str(step) for step in value]
    if isinstance(value, str) and value:
        return [value]
    return []


def date_key_of(value: str | None) -> str | None:
    """The YYYY-MM-DD part of a date string, or None if it is not a real date."""
    if not value:
        return None
    key = value.split("T")[0]
    if not DATE_KEY_RE.match(key):
        return None
    try:
        datetime.strptime(key, "%Y-%m-%d")
    except ValueError:
        return None
    return key


def _optional_str(value: Any) -> str | None:
    if value is None or isinstance(value, str):
        return value
    return str(value)


def is_time_of_day(value: str | None) -> bool:
    """True when value looks like H:MM or HH:MM rather than a date."""
    return value is not None and TIME_OF_DAY_RE.match(value) is not None


@dataclass
class Todo:
    """Domain entity for a Todo.

    `start` and `end` hold either a time of day ("09:30") or a date string;
    use `is_time_of_day` / `domain.query.parse_time` to tell them apart.
    Unknown keys read from disk are kept in `extra` and written back.
    """

    name: str
    id: str = field(default_factory=generate_id)
    description: str = ""
    project: str = ""
    status: str | None = None
    steps: list[str] = field(default_factory=list)
    start: str | None = None
    end: str | None = None
    date: str | None = None
    created: str = field(default_factory=lambda: format_timestamp(utc_now()))
    updated: str = ""
    extra: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.steps = normalize_steps(self.steps)
        if not self.updated:
            self.updated = self.created

    @property
    def is_done(self) -> bool:
        return self.status in DONE_STATUSES

    @property
    def date_key(self) -> str:
        """File shard key: date, else created's UTC date, else today.

        A `date` that is not a real YYYY-MM-DD date is ignored, so a record
        can never name a file outside the store directory.
        """
        key = date_key_of(self.date)
        if key is not None:
            return key
        created = parse_timestamp(self.created)
        if created is not None:
            return created.astimezone(timezone.utc).date().isoformat()
        return today_key()

    def touch(self) -> None:
        """Re-stamp `updated`, keeping it strictly increasing."""
        now = utc_now()
        previous = parse_timestamp(self.updated) or parse_timestamp(self.created)
        if previous is not None and now <= previous:
            now = previous + timedelta(microseconds=1)
        self.updated = format_timestamp(now)

    def apply(self, changes: Mapping[str, Any]) -> None:
        """Shallow-merge changes over this record and re-stamp `updated`.

        `id` and `created` are never overwritten; keys that are not record
        fields land in `extra`.
        """
        for key, value in changes.items():
            if key in IMMUTABLE_FIELDS or key in ("updated", "extra"):
                continue
            if key == "steps":
                self.steps = normalize_steps(value)
            elif key in _FIELD_NAMES:
                setattr(self, key, value)
            else:
                self.extra[key] = value
        self.touch()

    def to_dict(self) -> dict[str, Any]:
        """Record JSON shape as stored on disk."""
        data: dict[str, Any] = dict(self.extra)
        data.update(
            {
                "id": self.id,
                "name": self.name,
                "description": self.description,
                "project": self.project,
                "status": self.status,
                "steps": list(self.steps),
                "start": self.start,
                "end": self.end,
                "date": self.date,
                "created": self.created,
                "updated": self.updated,
            }
        )
        return data

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "Todo":
        """Build a record from stored JSON.

        Older records kept their checklist in a `process` array; it is used
        as `steps` when `steps` is absent. Hand-edited values of the wrong
        type (e.g. a numeric `start`) are read as strings.
        """
        steps = raw.get("steps")
        if steps is None and isinstance(raw.get("process"), list):
            steps = raw["process"]
        created = _optional_str(raw.get("created")) or ""
        extra = {k: v for k, v in raw.items() if k not in _FIELD_NAMES}
        return cls(
            id=str(raw.get("id") or generate_id()),
            name=_optional_str(raw.get("name")) or "",
            description=_optional_str(raw.get("description")) or "",
            project=_optional_str(raw.get("project")) or "",
            status=_optional_str(raw.get("status")),
            steps=normalize_steps(steps),
            start=_optional_str(raw.get("start")),
            end=_optional_str(raw.get("end")),
            date=_optional_str(raw.get("date")),
            created=created,
            updated=_optional_str(raw.get("updated")) or created,
            extra=extra,
        )
