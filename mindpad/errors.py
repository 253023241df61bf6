"""Exception types raised by the MindPad core."""


class MindPadError(Exception):
    """Base class for all MindPad errors."""


class ParseError(MindPadError):
    """Raised when map JSON is invalid or does not describe a tree."""


class ReadError(MindPadError):
    """Raised when a map file cannot be read."""


class WriteError(MindPadError):
    """Raised when a map or export file cannot be written."""
