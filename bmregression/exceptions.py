"""Exception classes and exit codes for bmregression.

Two families live here. Command-level errors (``UsageError``, ``CatalogUnreadable``, ``ProvisionError``,
``ReportError``) abort the whole invocation and are mapped to an exit code by the CLI. Per-case errors derive from
``RegressionError``; the batch runner catches them, reports them against the case name and moves on to the next case.
"""


class ExitCode:
    """Standard exit codes for the bmregression application."""

    OK = 0  # Success
    TEST_FAILURE = 1  # One or more regressions failed or errored
    USAGE = 2  # Command line usage error
    RUNTIME = 4  # Runtime error (unreadable catalog, failed clone, unwritable report)
    INTERNAL = 99  # Internal/unexpected error


class CliError(Exception):
    """Base class for command line interface errors."""

    exit_code = ExitCode.RUNTIME


class UsageError(CliError):
    """Error in command line usage or invalid parameters."""

    exit_code = ExitCode.USAGE


class CatalogUnreadable(CliError):
    """The catalog root directory could not be enumerated."""


class ProvisionError(CliError):
    """A repository needed for the run could not be cloned."""


class ReportError(CliError):
    """The YAML report could not be written."""


class RegressionError(CliError):
    """Base class for errors confined to a single regression case."""

    exit_code = ExitCode.TEST_FAILURE

    @property
    def kind(self) -> str:
        return type(self).__name__


class CaseMissing(RegressionError):
    """The case subdirectory does not exist in the catalog."""


class ConfigMissing(RegressionError):
    """The case has no ``config.yaml``."""


class ConfigInvalid(RegressionError):
    """``config.yaml`` is not valid YAML or lacks a required field."""


class BaseMissing(RegressionError):
    """The ``regbase`` working directory does not exist in the example sources."""


class CommandFailed(RegressionError):
    """The regression command exited with a non-zero status.

    Carries the captured standard output and error so they can be shown to the user.
    """

    def __init__(self, message: str, returncode: int | None = None, stdout: str = "", stderr: str = ""):
        super().__init__(message)
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr


class CommandTimeout(CommandFailed):
    """The regression command did not finish within the configured timeout."""


class OutputMissing(RegressionError):
    """The command did not produce the ``sourcedata`` file."""


class ExpectedMissing(RegressionError):
    """The expected ``targetdata`` file does not exist in the catalog."""


class WriteFailed(RegressionError):
    """Overwriting the expected ``targetdata`` file failed."""
