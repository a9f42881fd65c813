from typing import List, Optional

from . import actions
from .errors import ConfigError
from .models import Inputs, Strategy


def parse_submodule_list(raw: str) -> List[str]:
    # Actions inputs cannot be arrays, so submodules arrive newline separated
    raw = raw.strip()
    if not raw:
        return []
    return [line.strip().replace('"', '') for line in raw.split('\n')]


def parse_strategy(raw: str) -> Strategy:
    try:
        return Strategy(raw.strip())
    except ValueError:
        choices = ', '.join(f"'{s.value}'" for s in Strategy)
        raise ConfigError(f"Invalid strategy '{raw.strip()}'. Expected one of: {choices}") from None


def parse_inputs(gitmodules_path: Optional[str] = None,
                 submodules: Optional[str] = None,
                 strategy: Optional[str] = None) -> Inputs:
    """Build the run configuration; explicit values win over INPUT_* variables."""
    if gitmodules_path is None:
        gitmodules_path = actions.get_input('gitmodulesPath')
    if submodules is None:
        submodules = actions.get_input('submodules')
    if strategy is None:
        strategy = actions.get_input('strategy')

    gitmodules_path = gitmodules_path.strip()
    if not gitmodules_path:
        raise ConfigError('Input required and not supplied: gitmodulesPath')

    parsed_strategy = parse_strategy(strategy)
    parsed_submodules = parse_submodule_list(submodules)
    actions.debug(f"Input submodules: {parsed_submodules}")

    return Inputs(
        gitmodules_path=gitmodules_path,
        submodules=parsed_submodules,
        strategy=parsed_strategy,
    )
