"""Shared fixtures: an in-memory stand-in for GitClient."""

from typing import Dict, List, Optional

import pytest

from submodule_updater.errors import ToolInvocationError
from submodule_updater.models import Submodule


class FakeGit:
    """Records calls and answers from canned per-path state."""

    def __init__(self, commits: Optional[Dict[str, str]] = None, tags: Optional[Dict[str, str]] = None,
                 latest_tags: Optional[Dict[str, str]] = None, update_output: str = ''):
        self.commits = commits or {}
        self.tags = tags or {}
        self.latest_tags = latest_tags or {}
        self.update_output = update_output
        self.update_calls: List[List[str]] = []
        self.reset_calls: List[tuple] = []

    def get_commit(self, path):
        if path not in self.commits:
            raise ToolInvocationError(f"'{path}' is not a git checkout")
        sha = self.commits[path]
        return sha, sha[:7]

    def has_tag(self, path, commit_sha):
        return path in self.tags and self.commits.get(path) == commit_sha

    def get_previous_tag(self, path):
        return self.tags.get(path)

    def get_latest_tag(self, path):
        if path not in self.latest_tags:
            raise ToolInvocationError(f"git describe failed in '{path}': No names found")
        return self.latest_tags[path]

    def update_remote(self, paths):
        self.update_calls.append(list(paths))
        return self.update_output

    def reset_hard(self, path, ref):
        self.reset_calls.append((path, ref))


def make_submodule(path: str, sha: str = '1111111aaaaaaa', tag: Optional[str] = None, name: Optional[str] = None) -> Submodule:
    return Submodule(
        name=name or path,
        path=path,
        url=f"https://github.com/org/{path.split('/')[-1]}.git",
        remote_name=f"org/{path.split('/')[-1]}",
        previous_short_commit_sha=sha[:7],
        previous_commit_sha=sha,
        previous_commit_sha_has_tag=False,
        previous_tag=tag,
        latest_short_commit_sha=sha[:7],
        latest_commit_sha=sha,
    )


def update_line(path: str, sha: str) -> str:
    return f"Submodule path '{path}': checked out '{sha}'"


@pytest.fixture
def fake_git():
    return FakeGit()
