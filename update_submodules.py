#!/usr/bin/env python3
"""
Advance git submodules to the latest remote commit (or latest tag) and publish
the results as GitHub Actions step outputs.

- Read inputs (gitmodulesPath, submodules, strategy) from flags or INPUT_* env
- Parse .gitmodules and record each submodule's current commit and tag
- Keep the requested submodules (tag strategy: only those already on a tag line)
- Run one `git submodule update --remote` for all of them
- Tag strategy: hard reset each updated submodule to its nearest tag
- Emit json, matrix, prBody and <name>--* outputs

Requires: GitPython, python-dotenv
"""

import argparse
import os
import sys

from dotenv import find_dotenv, load_dotenv

from submodule_updater import actions
from submodule_updater.errors import UpdaterError
from submodule_updater.git_ops import GitClient
from submodule_updater.inputs import parse_inputs
from submodule_updater.models import NothingToDo
from submodule_updater.outputs import set_outputs
from submodule_updater.pipeline import run


def update_all_submodules(args: argparse.Namespace) -> bool:
    try:
        inputs = parse_inputs(
            gitmodules_path=args.gitmodules_path,
            submodules=args.submodules,
            strategy=args.strategy,
        )
        # .gitmodules lives in the superproject, so relative paths follow --repo
        inputs = inputs._replace(
            gitmodules_path=os.path.normpath(os.path.join(args.repo, inputs.gitmodules_path))
        )
        result = run(inputs, GitClient(args.repo))

        if isinstance(result, NothingToDo):
            actions.info(result.reason)
            actions.info('Nothing to do. Exiting...')
            return True

        set_outputs(result)
    except UpdaterError as e:
        actions.set_failed(str(e))
        return False
    return True


# ========================
# CLI
# ========================

def main(argv=None):
    parser = argparse.ArgumentParser(
        description='Update submodules to their latest remote commit or tag and set GitHub Actions outputs.'
    )
    parser.add_argument('--gitmodules-path', dest='gitmodules_path',
                        help='Path to .gitmodules, relative to --repo (default: $INPUT_GITMODULESPATH)')
    parser.add_argument('--submodules',
                        help='Newline separated submodule paths to update (default: $INPUT_SUBMODULES, all)')
    parser.add_argument('--strategy', help="'commit' or 'tag' (default: $INPUT_STRATEGY)")
    parser.add_argument('--repo', default='.', help='Superproject root the submodule paths are relative to')
    args = parser.parse_args(argv)

    load_dotenv(find_dotenv(usecwd=True))

    sys.exit(0 if update_all_submodules(args) else 1)


if __name__ == '__main__':
    main()
