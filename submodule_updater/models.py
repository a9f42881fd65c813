from dataclasses import dataclass
from enum import Enum
from typing import List, NamedTuple, Optional


class Strategy(str, Enum):
    COMMIT = 'commit'
    TAG = 'tag'


class Inputs(NamedTuple):
    gitmodules_path: str
    submodules: List[str]
    strategy: Strategy


class NothingToDo(NamedTuple):
    """Terminal pipeline result: stop early and report success without outputs."""
    reason: str


class UpdatedSubmodule(NamedTuple):
    path: str
    commit_sha: str
    short_commit_sha: str


@dataclass
class Submodule:
    """
    One [submodule "..."] group from .gitmodules plus its checkout state.

    The latest_* fields start out equal to the previous_* ones and only
    change once the remote update reports a new commit for the path.
    """

    name: str
    path: str
    url: str
    remote_name: str
    previous_short_commit_sha: str
    previous_commit_sha: str
    previous_commit_sha_has_tag: bool
    previous_tag: Optional[str]
    latest_short_commit_sha: str
    latest_commit_sha: str
    latest_tag: Optional[str] = None

    def to_dict(self) -> dict:
        data = {
            'name': self.name,
            'path': self.path,
            'url': self.url,
            'remoteName': self.remote_name,
            'previousShortCommitSha': self.previous_short_commit_sha,
            'previousCommitSha': self.previous_commit_sha,
            'previousCommitShaHasTag': self.previous_commit_sha_has_tag,
            'previousTag': self.previous_tag,
            'latestShortCommitSha': self.latest_short_commit_sha,
            'latestCommitSha': self.latest_commit_sha,
            'latestTag': self.latest_tag,
        }
        # Unset tags are left out entirely rather than serialised as null
        return {k: v for k, v in data.items() if v is not None}
