"""
Thin wrapper over GitPython for the handful of git queries the updater needs.

Every git failure surfaces as ToolInvocationError carrying git's own message.
"""

import os
from contextlib import suppress
from typing import List, Optional, Tuple

from git import Repo, GitCommandError
from git.exc import InvalidGitRepositoryError, NoSuchPathError

from .errors import ToolInvocationError


def _git_error_message(e: GitCommandError) -> str:
    stderr = (e.stderr or '').strip()
    if stderr.startswith('stderr:'):
        stderr = stderr[len('stderr:'):].strip().strip("'").strip()
    return stderr or str(e)


class GitClient:
    """Runs git against the superproject at ``root`` and its submodule checkouts."""

    def __init__(self, root: str = '.'):
        self.root = root

    def _repo(self, path: str = '') -> Repo:
        full_path = os.path.join(self.root, path) if path else self.root
        try:
            return Repo(full_path)
        except (InvalidGitRepositoryError, NoSuchPathError) as e:
            raise ToolInvocationError(f"'{path or self.root}' is not a git checkout: {e}") from e

    def _run(self, path: str, command: str, *args) -> str:
        repo = self._repo(path)
        try:
            return getattr(repo.git, command)(*args)
        except GitCommandError as e:
            raise ToolInvocationError(f"git {command} failed in '{path or self.root}': {_git_error_message(e)}") from e

    def get_commit(self, path: str) -> Tuple[str, str]:
        sha = self._run(path, 'rev_parse', 'HEAD').strip()
        short_sha = self._run(path, 'rev_parse', '--short', 'HEAD').strip()
        return sha, short_sha

    def has_tag(self, path: str, commit_sha: str) -> bool:
        return bool(self._run(path, 'tag', '--points-at', commit_sha).strip())

    def get_previous_tag(self, path: str) -> Optional[str]:
        """Nearest tag reachable from HEAD, or None when the history has no tags."""
        repo = self._repo(path)
        with suppress(GitCommandError):
            return repo.git.describe('--tags', '--abbrev=0').strip() or None
        return None

    def get_latest_tag(self, path: str) -> str:
        return self._run(path, 'describe', '--tags', '--abbrev=0').strip()

    def update_remote(self, paths: List[str]) -> str:
        """Run one batched `git submodule update --remote` and return its stdout."""
        return self._run('', 'submodule', 'update', '--remote', '--', *paths)

    def reset_hard(self, path: str, ref: str):
        self._run(path, 'reset', '--hard', ref)
