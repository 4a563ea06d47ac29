"""Exceptions raised by scitree."""


class SciTreeError(Exception):
    """Base class for scitree errors."""


class NotFound(SciTreeError):
    """The tree document does not exist in the store."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Unable to get tree data from path: {path}.")
