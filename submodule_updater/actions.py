"""
GitHub Actions I/O: inputs from INPUT_* variables, workflow commands on stdout,
and step outputs appended to $GITHUB_OUTPUT.
"""

import os
import uuid
from contextlib import contextmanager

from .errors import OutputError


# ========================
# Inputs
# ========================

def get_input(name: str) -> str:
    return os.environ.get(f"INPUT_{name.replace(' ', '_').upper()}", '').strip()


# ========================
# Logging
# ========================

def _escape_data(value: str) -> str:
    return value.replace('%', '%25').replace('\r', '%0D').replace('\n', '%0A')


def info(message: str):
    print(message)


def debug(message: str):
    print(f"::debug::{_escape_data(message)}")


def log_error(message: str):
    print(f"::error::{_escape_data(message)}")


def start_log_group(title: str):
    print(f"::group::{title}")


def end_log_group():
    print("::endgroup::")


@contextmanager
def log_group(title: str):
    start_log_group(title)
    try:
        yield
    finally:
        end_log_group()


def set_failed(message: str):
    """Report the run as failed; the caller is responsible for the exit status."""
    log_error(message)


# ========================
# Outputs
# ========================

def _format_output(name: str, value) -> str:
    if isinstance(value, bool):
        value = 'true' if value else 'false'
    value = str(value)
    delimiter = f"ghadelimiter_{uuid.uuid4()}"
    if delimiter in name or delimiter in value:
        raise ValueError(f"Unexpected input: output value contains the delimiter {delimiter}")
    return f"{name}<<{delimiter}\n{value}\n{delimiter}\n"


def set_output(name: str, value):
    output_file = os.environ.get('GITHUB_OUTPUT', '')
    if not output_file:
        print(f"{name}={value}")
        return
    try:
        with open(output_file, 'a', encoding='utf-8') as f:
            f.write(_format_output(name, value))
    except (OSError, ValueError) as e:
        raise OutputError(f"Could not set output '{name}': {e}") from e
