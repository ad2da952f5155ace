"""Exception taxonomy shared by the splitter, rebuilder and CLI."""


class SlicerError(Exception):
    """
    Base exception class for all split/rebuild errors.
    """
    pass


class PartIOError(SlicerError, OSError):
    """
    Raised when a source, part or destination file cannot be opened, read or written.
    """
    pass


class NoPartsFoundError(SlicerError):
    """
    Raised when a directory holds no part files.
    """
    pass


class MalformedPartError(SlicerError):
    """
    Raised when a part file is too short to contain its index header.
    """
    pass


class DuplicateIndexError(SlicerError):
    """
    Raised when two part files declare the same index.
    """
    pass


class IncompletePartSetError(SlicerError):
    """
    Raised when part indices are not contiguous from zero.
    """
    pass


class InvalidArgumentError(SlicerError, ValueError):
    """
    Raised for non-positive part sizes, unknown units or missing paths.
    """
    pass
