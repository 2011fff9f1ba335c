"""Errors raised while loading, building and rendering Task manifests."""


class TaskmdError(Exception):
    """Base exception for errors that should be displayed without traceback.

    This exception can take a custom message.
    """

    def __init__(self, message: str = "A taskmd error occurred."):
        """Initialize the error with a custom message.

        Args:
            message: The error message to display.
        """
        super().__init__(message)
        self.message = message


class ManifestDecodeError(TaskmdError):
    """A document could not be decoded into a Task."""


class KustomizeBuildError(TaskmdError):
    """The kustomize build of a directory failed."""


class OutputDirectoryError(TaskmdError):
    """The output directory cannot be wiped without destroying inputs or the working directory."""
