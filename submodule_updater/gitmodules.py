"""
Reading, validating and filtering the submodule declarations in .gitmodules.
"""

import configparser
import re
from typing import List, Tuple

from .errors import GitmodulesNotFoundError, ReadError, ValidationError
from .models import Strategy, Submodule

URL_PATTERN = re.compile(r'[A-Za-z][A-Za-z0-9+.-]*')


# ========================
# File access
# ========================

def read_file(path: str) -> str:
    try:
        with open(path, 'r', encoding='utf-8') as f:
            return f.read()
    except FileNotFoundError as e:
        raise GitmodulesNotFoundError(f"File not found: {path}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise ReadError(f"Error reading file: {e}") from e


# ========================
# Remote names
# ========================

def get_remote_name(url: str) -> str:
    """
    Derive a short label such as 'org/repo' from a remote URL.

    Handles 'scheme://host/org/repo', 'git@host:org/repo' and 'user@host~path/repo'
    forms, with or without a trailing '.git' or slash. A URL with no '~', ':'
    or '.' at all (a bare local path) is returned whole, minus leading slashes.
    """
    url = re.sub(r'\.git$', '', url.rstrip('/'))

    start = len(url) - 1
    while start >= 0:
        if url[start] in '~:':
            start += 1
            break
        if url[start] == '.':
            break
        start -= 1
    start = max(start, 0)

    # Stopping on a dot most likely means a domain label; skip to the first path segment
    if start < len(url) and url[start] == '.':
        slash = url.find('/', start)
        if slash == -1:
            return url.lstrip('/')
        start = slash

    return url[start:].lstrip('/')


# ========================
# Parsing
# ========================

def _unquote(value: str) -> str:
    return value.replace('"', '').strip()


def validate_section(section: str, values) -> Tuple[bool, object]:
    """
    Check one [submodule "name"] group.

    Returns (True, {'name', 'path', 'url'}) or (False, error message).
    """
    parts = section.split('"')
    name = parts[1].strip() if len(parts) >= 3 else ''
    if not name:
        return False, f"[{section}]: section header has no quoted submodule name"

    path = _unquote(values.get('path', ''))
    url = _unquote(values.get('url', ''))
    missing = [key for key, value in (('path', path), ('url', url)) if not value]
    if missing:
        return False, f"[{section}]: missing required key(s): {', '.join(missing)}"
    if not URL_PATTERN.search(url):
        return False, f"[{section}]: invalid url '{url}'"

    return True, {'name': name, 'path': path, 'url': url}


def parse_sections(content: str) -> List[dict]:
    parser = configparser.ConfigParser(interpolation=None, strict=False, default_section='\0')
    try:
        parser.read_string(content)
    except configparser.Error as e:
        raise ValidationError(f"Invalid .gitmodules content: {e}") from e

    declarations = []
    errors = []
    for section in parser.sections():
        ok, payload = validate_section(section, parser[section])
        if ok:
            declarations.append(payload)
        else:
            errors.append(payload)
    if errors:
        raise ValidationError('Invalid .gitmodules content:\n' + '\n'.join(errors))
    return declarations


def parse_gitmodules(content: str, git) -> List[Submodule]:
    submodules: List[Submodule] = []
    for declaration in parse_sections(content):
        path = declaration['path']
        commit_sha, short_commit_sha = git.get_commit(path)
        submodules.append(Submodule(
            name=declaration['name'],
            path=path,
            url=declaration['url'],
            remote_name=get_remote_name(declaration['url']),
            previous_short_commit_sha=short_commit_sha,
            previous_commit_sha=commit_sha,
            previous_commit_sha_has_tag=git.has_tag(path, commit_sha),
            previous_tag=git.get_previous_tag(path),
            # Until the remote update runs, the checked out commit is also the latest one
            latest_short_commit_sha=short_commit_sha,
            latest_commit_sha=commit_sha,
        ))
    return submodules


# ========================
# Selection
# ========================

def filter_submodules(input_submodules: List[str], detected_submodules: List[Submodule],
                      strategy: Strategy) -> List[Submodule]:
    valid = detected_submodules
    if strategy == Strategy.TAG:
        valid = [sm for sm in valid if sm.previous_tag]

    if not input_submodules:
        return valid
    return [sm for sm in valid if sm.path in input_submodules]
