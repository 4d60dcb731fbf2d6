"""
Exit codes and error types for projinit.

Every fatal condition in the pipeline is raised as a ``CommandError`` subclass
and carries the exit code the CLI terminates with.
"""

SUCCESS = 0
GENERAL_ERROR = 1
USAGE_ERROR = 2
NOT_FOUND = 3
CONFIG_ERROR = 4
IO_ERROR = 5
INTERRUPTED = 130


class CommandError(Exception):
    """Base class for errors that end a command with a specific exit code."""

    exit_code = GENERAL_ERROR

    def __init__(self, message, exit_code=None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class ConfigurationError(CommandError):
    """Malformed defaults/rename JSON, a broken template descriptor or config file."""

    exit_code = CONFIG_ERROR

    def __init__(self, message, path=None):
        if path is not None:
            message = f"{message}: {path}"
        super().__init__(message)
        self.path = path


class TemplateNotFoundError(CommandError):
    """No template matches the requested name."""

    exit_code = NOT_FOUND

    def __init__(self, name, available=()):
        self.name = name
        self.available = sorted(available)
        message = f'A valid init template name must be specified (got "{name}").'
        if self.available:
            message += "\nAvailable templates: " + ", ".join(self.available)
        super().__init__(message)


class MaterializeError(CommandError):
    """A file could not be copied or written."""

    exit_code = IO_ERROR

    def __init__(self, path, error):
        super().__init__(f"Unable to write {path}: {error}")
        self.path = path
        self.error = error


class ExistingFilesError(CommandError):
    """The destination already holds files matched by the template's warn_on patterns."""

    exit_code = USAGE_ERROR


class TemplateFailedError(CommandError):
    """The template procedure reported a failure through its completion callback."""


def get_exit_code_for_exception(exc):
    """Map an arbitrary exception to a process exit code."""
    if isinstance(exc, CommandError):
        return exc.exit_code
    if isinstance(exc, KeyboardInterrupt):
        return INTERRUPTED
    if isinstance(exc, OSError):
        return IO_ERROR
    if isinstance(exc, ValueError):
        return USAGE_ERROR
    return GENERAL_ERROR
