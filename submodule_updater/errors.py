class UpdaterError(Exception):
    """Base class for failures that abort a run."""


class ConfigError(UpdaterError):
    pass


class ReadError(UpdaterError):
    pass


class GitmodulesNotFoundError(ReadError):
    pass


class ValidationError(UpdaterError):
    pass


class ToolInvocationError(UpdaterError):
    """A git command failed or a path is not a git checkout."""


class OutputError(UpdaterError):
    """A step output could not be written."""
