"""Thin git wrapper used by the `todo commit/push/pull/sync` commands."""

import subprocess
from pathlib import Path

import structlog

from core.exceptions import GitError

logger = structlog.get_logger()


class GitRepo:
    """Runs git in the working tree that holds the todo directory."""

    def __init__(self, work_tree: Path, todo_dir: Path) -> None:
        self.work_tree = work_tree
        self.todo_dir = todo_dir

    def _run(self, *args: str) -> str:
        logger.debug("git_command", args=list(args), cwd=str(self.work_tree))
        try:
            result = subprocess.run(
                ["git", *args],
                cwd=self.work_tree,
                capture_output=True,
                text=True,
                check=True,
            )
        except FileNotFoundError as e:
            raise GitError(args[0], f"git not available ({e})") from e
        except subprocess.CalledProcessError as e:
            reason = (e.stderr or e.stdout or "").strip() or f"exit status {e.returncode}"
            raise GitError(args[0], reason) from e
        return result.stdout

    def commit(self, message: str) -> bool:
        """Stage the todo directory and commit it.

        Returns False without committing when there is nothing to commit.
        """
        self._run("add", "--all", "--", str(self.todo_dir))
        if not self._run("diff", "--cached", "--name-only").strip():
            return False
        self._run("commit", "-m", message)
        return True

    def push(self) -> str:
        return self._run("push")

    def pull(self) -> str:
        return self._run("pull")
