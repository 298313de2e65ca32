"""
Exceptions raised by the tree model.
"""


class TreeError(Exception):
    """Base class for every error raised by flextree."""
    pass


class InvalidIndexError(TreeError, IndexError):
    """Exception raised when a caller-supplied index is out of range."""

    def __init__(self, index: int, size: int, what: str = "index"):
        self.index = index
        self.size = size
        super().__init__(f"{what} {index} out of range for size {size}")


class CycleError(TreeError, ValueError):
    """Exception raised when an edit would make a node its own ancestor."""
    pass
