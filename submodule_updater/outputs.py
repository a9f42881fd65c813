"""
Formatting of run results: JSON, the build matrix, PR descriptions and the
per-submodule step outputs.
"""

import json
import re
from typing import List, Optional, Tuple

from . import actions
from .models import Submodule


# ========================
# JSON
# ========================

def to_json(submodules: List[Submodule]) -> str:
    return json.dumps([sm.to_dict() for sm in submodules])


def to_json_pretty(submodules: List[Submodule]) -> str:
    return json.dumps([sm.to_dict() for sm in submodules], indent=2)


def to_json_matrix(submodules: List[Submodule]) -> str:
    matrix = {
        'name': [sm.name for sm in submodules],
        'include': [sm.to_dict() for sm in submodules],
    }
    return json.dumps(matrix)


# ========================
# PR bodies
# ========================

def parse_github_owner_repo(url: str) -> Optional[Tuple[str, str]]:
    m = re.search(r'github\.com[/:]([^/]+)/([^/]+?)(?:\.git)?/?$', url)
    return m.groups() if m else None


def _previous_ref(submodule: Submodule) -> Tuple[str, bool]:
    # previous_tag is only the nearest tag behind the checkout; name it only when it sits on that commit
    if submodule.previous_tag and submodule.previous_commit_sha_has_tag:
        return submodule.previous_tag, True
    return submodule.previous_commit_sha, False


def _latest_ref(submodule: Submodule) -> Tuple[str, bool]:
    # After a tag reset the checkout is on the tag, not on the remote head in latest_commit_sha
    if submodule.latest_tag:
        return submodule.latest_tag, True
    return submodule.latest_commit_sha, False


def _version_label(ref: str, is_tag: bool) -> str:
    return f"`{ref}`" if is_tag else f"`{ref[:7]}`"


def _ref_link(repo_url: str, title: str, ref: str, is_tag: bool) -> str:
    if is_tag:
        return f"- {title} tag: {repo_url}/releases/tag/{ref}"
    return f"- {title} commit: {repo_url}/commit/{ref}"


def single_pr_body(submodule: Submodule) -> str:
    base, base_is_tag = _previous_ref(submodule)
    head, head_is_tag = _latest_ref(submodule)
    previous = _version_label(base, base_is_tag)
    latest = _version_label(head, head_is_tag)

    owner_repo = parse_github_owner_repo(submodule.url)
    if not owner_repo:
        return f"Bumps {submodule.remote_name} (`{submodule.path}`) from {previous} to {latest}."

    repo_url = 'https://github.com/{}/{}'.format(*owner_repo)
    lines = [
        f"Bumps [{submodule.remote_name}]({repo_url}) (`{submodule.path}`) from {previous} to {latest}.",
        '',
        _ref_link(repo_url, 'Previous', base, base_is_tag),
        _ref_link(repo_url, 'Latest', head, head_is_tag),
        f"- Changes: {repo_url}/compare/{base}...{head}",
    ]
    return '\n'.join(lines)


def multiple_pr_body(submodules: List[Submodule]) -> str:
    if len(submodules) == 1:
        return single_pr_body(submodules[0])

    lines = ['Bumps the following submodules:', '']
    lines.extend(f"- `{sm.name}`" for sm in submodules)
    for sm in submodules:
        lines.extend(['', f"## {sm.name}", '', single_pr_body(sm)])
    return '\n'.join(lines)


# ========================
# Step outputs
# ========================

def set_dynamic_outputs(prefix: str, submodule: Submodule):
    actions.set_output(f"{prefix}--updated", True)
    actions.set_output(f"{prefix}--path", submodule.path)
    actions.set_output(f"{prefix}--url", submodule.url)
    actions.set_output(f"{prefix}--remoteName", submodule.remote_name)
    actions.set_output(f"{prefix}--previousShortCommitSha", submodule.previous_short_commit_sha)
    actions.set_output(f"{prefix}--previousCommitSha", submodule.previous_commit_sha)
    actions.set_output(f"{prefix}--latestShortCommitSha", submodule.latest_short_commit_sha)
    actions.set_output(f"{prefix}--latestCommitSha", submodule.latest_commit_sha)
    actions.set_output(f"{prefix}--previousTag", submodule.previous_tag or '')
    actions.set_output(f"{prefix}--latestTag", submodule.latest_tag or '')
    actions.set_output(f"{prefix}--prBody", single_pr_body(submodule))


def set_outputs(submodules: List[Submodule]):
    actions.set_output('json', to_json(submodules))
    actions.set_output('matrix', to_json_matrix(submodules))
    actions.set_output('prBody', multiple_pr_body(submodules))
    for sm in submodules:
        set_dynamic_outputs(sm.name, sm)
        if sm.name != sm.path:
            set_dynamic_outputs(sm.path, sm)
