from __future__ import annotations

"""
Conversion Error Taxonomy.

Every fatal condition of a conversion run derives from ConversionError so
that the engine and the CLI can abort on the first failure with a single
except clause. Unmatched log lines are not errors and never reach here.
"""


class ConversionError(Exception):
    """Base class for all fatal conversion failures."""


class FilesystemError(ConversionError):
    """
    A path could not be described for the export.

    Raised when lstat fails (entry removed, permission denied) or when the
    path has no resolvable base name.

    Attributes:
        path: The offending filesystem path.
    """

    def __init__(self, path: str, reason: str):
        super().__init__(f"Cannot read metadata of '{path}': {reason}")
        self.path = path
        self.reason = reason


class OrderingError(ConversionError):
    """
    The input re-entered a directory whose scope was already closed.

    Attributes:
        path: The file path that triggered the violation.
        directory: The directory that would have been reopened.
    """

    def __init__(self, path: str, directory: str):
        super().__init__(
            f"Input is not in depth-first order: '{path}' reopens "
            f"already closed directory '{directory}'"
        )
        self.path = path
        self.directory = directory


class EmitterStateError(ConversionError):
    """The tree emitter was driven out of its start/visit/finish sequence."""


class OutputExistsError(ConversionError):
    """The output file exists and overwriting was not allowed."""

    def __init__(self, path: str):
        super().__init__(f"Output file already exists: '{path}' (use --overwrite)")
        self.path = path
