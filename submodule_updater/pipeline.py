"""
Update workflow: parse .gitmodules, select, advance to the latest commit and
optionally snap to the latest tag.
"""

from typing import List, Union

from . import actions
from .gitmodules import filter_submodules, parse_gitmodules, read_file
from .models import Inputs, NothingToDo, Strategy, Submodule
from .outputs import to_json_pretty
from .updater import update_to_latest_commit, update_to_latest_tag


def log_submodules(title: str, submodules: List[Submodule]):
    with actions.log_group(f"{title} ({len(submodules)})"):
        for sm in submodules:
            actions.info(f"  - {sm.name} ({sm.path})")
    actions.debug(f"{title}: {to_json_pretty(submodules)}")


def run(inputs: Inputs, git) -> Union[List[Submodule], NothingToDo]:
    content = read_file(inputs.gitmodules_path)
    if not content.strip():
        return NothingToDo('No submodules detected.')

    detected = parse_gitmodules(content, git)
    if not detected:
        return NothingToDo('No submodules detected.')
    log_submodules('Detected submodules', detected)

    selected = filter_submodules(inputs.submodules, detected, inputs.strategy)
    if not selected:
        return NothingToDo('No valid submodules detected.')
    log_submodules('Valid submodules', selected)

    updated = update_to_latest_commit(selected, git)
    if not updated:
        return NothingToDo('All submodules have no new remote commits.')
    log_submodules('Updated submodules', updated)

    if inputs.strategy == Strategy.TAG:
        updated = update_to_latest_tag(updated, git)
        log_submodules('Submodules reset to latest tag', updated)

    return updated
