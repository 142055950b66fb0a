"""Date-sharded JSON file store.

Every record lives in `<directory>/<YYYY-MM-DD>.json`, chosen by the
record's derived date key. Loads read every data file; saves rewrite the
whole store and delete files whose date no longer has records.
"""

import contextlib
import json
import os
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import structlog

from core.exceptions import StorageError
from domain.entities.todo import Todo, date_key_of, today_key
from domain.query import group_by_date

logger = structlog.get_logger()


@dataclass(frozen=True)
class StoreConfig:
    """Where the store lives on disk."""

    directory: Path
    legacy_file: Path | None = None
    suffix: str = ".json"

    def path_for(self, date_key: str) -> Path:
        if date_key_of(date_key) != date_key:
            raise ValueError(f"not a YYYY-MM-DD date key: {date_key!r}")
        return self.directory / f"{date_key}{self.suffix}"


def _dump(records: list[dict[str, Any]]) -> str:
    return json.dumps(records, indent=2, ensure_ascii=False) + "\n"


class DateShardedStore:
    """Loads and saves the complete todo list as per-date JSON files."""

    def __init__(self, config: StoreConfig) -> None:
        self._config = config

    @property
    def config(self) -> StoreConfig:
        return self._config

    def data_files(self) -> list[Path]:
        """Data files currently in the directory, sorted by name."""
        directory = self._config.directory
        if not directory.is_dir():
            return []
        return sorted(
            p for p in directory.iterdir() if p.name.endswith(self._config.suffix) and p.is_file()
        )

    def _key_for(self, path: Path) -> str:
        return path.name[: -len(self._config.suffix)]

    # -------------------- migration --------------------
    def migrate_legacy(self) -> int:
        """Split the legacy single-file store into per-date files.

        Returns the number of records migrated. Errors are logged and
        swallowed so a broken legacy file never blocks loading.
        """
        legacy = self._config.legacy_file
        if legacy is None or not legacy.exists():
            return 0
        backup = legacy.with_name(legacy.name + ".backup")
        try:
            raw = json.loads(legacy.read_text(encoding="utf-8"))
            if not isinstance(raw, list):
                raise ValueError("legacy store is not a JSON array")

            by_date: dict[str, list[dict[str, Any]]] = {}
            for record in raw:
                if not isinstance(record, dict):
                    continue
                key = date_key_of(str(record.get("date") or "")) or today_key()
                by_date.setdefault(key, []).append(record)

            self._config.directory.mkdir(parents=True, exist_ok=True)
            migrated = 0
            for key, records in by_date.items():
                path = self._config.path_for(key)
                existing: list[dict[str, Any]] = []
                if path.exists():
                    existing = json.loads(path.read_text(encoding="utf-8"))
                    if not isinstance(existing, list):
                        raise ValueError(f"{path.name} is not a JSON array")
                known = {r.get("id") for r in existing if isinstance(r, dict)}
                fresh = [r for r in records if r.get("id") is None or r.get("id") not in known]
                path.write_text(_dump(existing + fresh), encoding="utf-8")
                migrated += len(fresh)

            legacy.rename(backup)
        except (OSError, ValueError) as e:
            logger.error("legacy_migration_failed", path=str(legacy), error=str(e))
            return 0

        logger.info(
            "legacy_migrated",
            path=str(legacy),
            backup=str(backup),
            records=migrated,
            dates=len(by_date),
        )
        return migrated

    # -------------------- load --------------------
    def load(self) -> list[Todo]:
        """Read every data file into one list.

        A file that cannot be read or parsed is skipped with a warning; the
        rest of the store still loads. A missing directory is an empty store.
        """
        self.migrate_legacy()

        todos: list[Todo] = []
        for path in self.data_files():
            try:
                raw = json.loads(path.read_text(encoding="utf-8"))
            except (OSError, ValueError) as e:
                logger.warning("todo_file_unreadable", path=str(path), error=str(e))
                continue
            if not isinstance(raw, list):
                logger.warning("todo_file_not_a_list", path=str(path))
                continue
            todos.extend(Todo.from_dict(record) for record in raw if isinstance(record, dict))

        logger.debug("todos_loaded", count=len(todos))
        return todos

    # -------------------- save --------------------
    def save(self, todos: Iterable[Todo]) -> list[str]:
        """Rewrite the whole store from the given list.

        Returns the date keys written. Raises StorageError if a file cannot
        be written; files already written by this call are left in place.
        """
        groups = group_by_date(todos)
        directory = self._config.directory

        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageError(str(directory), str(e)) from e

        for key, group in groups.items():
            path = self._config.path_for(key)
            tmp = path.with_name(path.name + ".tmp")
            try:
                tmp.write_text(_dump([t.to_dict() for t in group]), encoding="utf-8")
                os.replace(tmp, path)
            except OSError as e:
                with contextlib.suppress(OSError):
                    tmp.unlink()
                raise StorageError(str(path), str(e)) from e

        removed = 0
        for path in self.data_files():
            if self._key_for(path) in groups:
                continue
            try:
                path.unlink()
                removed += 1
            except OSError as e:
                logger.warning("stale_todo_file_not_removed", path=str(path), error=str(e))

        logger.debug("todos_saved", dates=len(groups), removed_files=removed)
        return list(groups)
