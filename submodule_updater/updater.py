"""
Advance selected submodules: one batched remote update, then (tag strategy)
a hard reset of each advanced submodule onto its nearest tag.
"""

import dataclasses
from concurrent.futures import ThreadPoolExecutor, FIRST_EXCEPTION, wait
from typing import List, Optional

from . import actions
from .errors import ToolInvocationError, UpdaterError
from .models import Submodule, UpdatedSubmodule

SHORT_SHA_LENGTH = 7


def parse_update_output(stdout: str) -> List[UpdatedSubmodule]:
    """
    Parse `git submodule update --remote` output.

    Each line looks like "Submodule path 'libs/foo': checked out 'abcdef...'";
    the path and commit are the second and fourth tokens when split on quotes.
    """
    updated: List[UpdatedSubmodule] = []
    for line in stdout.strip().splitlines():
        tokens = line.split("'")
        if len(tokens) < 5 or not tokens[1] or not tokens[3]:
            actions.debug(f"Skipping unrecognised git output line: {line}")
            continue
        commit_sha = tokens[3]
        updated.append(UpdatedSubmodule(
            path=tokens[1],
            commit_sha=commit_sha,
            short_commit_sha=commit_sha[:SHORT_SHA_LENGTH],
        ))
    return updated


def update_to_latest_commit(submodules: List[Submodule], git) -> List[Submodule]:
    paths = [sm.path for sm in submodules]
    stdout = git.update_remote(paths)
    if not stdout.strip():
        return []

    updated = parse_update_output(stdout)
    actions.debug(f"Submodules parsed from git output: {[u._asdict() for u in updated]}")

    by_path = {sm.path: sm for sm in submodules}
    for update in updated:
        submodule = by_path.get(update.path)
        if submodule:
            submodule.latest_commit_sha = update.commit_sha
            submodule.latest_short_commit_sha = update.short_commit_sha

    # Only submodules that actually moved are reported
    updated_paths = {u.path for u in updated}
    return [sm for sm in submodules if sm.path in updated_paths]


def _snap_to_tag(submodule: Submodule, git) -> Submodule:
    latest_tag = git.get_latest_tag(submodule.path)
    git.reset_hard(submodule.path, latest_tag)
    return dataclasses.replace(submodule, latest_tag=latest_tag)


def update_to_latest_tag(submodules: List[Submodule], git,
                         max_workers: Optional[int] = None) -> List[Submodule]:
    """
    Reset every submodule onto its nearest tag, one worker per checkout.

    The first failure aborts the whole run: lookups not yet started are
    cancelled and the error is re-raised. Errors that are not UpdaterErrors
    are wrapped in ToolInvocationError.
    """
    if not submodules:
        return []

    with ThreadPoolExecutor(max_workers=max_workers or len(submodules)) as executor:
        futures = {executor.submit(_snap_to_tag, sm, git): index for index, sm in enumerate(submodules)}
        done, pending = wait(futures, return_when=FIRST_EXCEPTION)
        for future in done:
            if future.exception() is not None:
                for other in pending:
                    other.cancel()
                error = future.exception()
                if isinstance(error, UpdaterError):
                    raise error
                path = submodules[futures[future]].path
                raise ToolInvocationError(f"Resetting '{path}' to its latest tag failed: {error}") from error

    results: List[Optional[Submodule]] = [None] * len(submodules)
    for future, index in futures.items():
        results[index] = future.result()
    return results
