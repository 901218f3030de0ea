"""Exception hierarchy for the move finder."""


class MoveFinderError(Exception):
    """Base exception for user-facing input failures."""


class DictionaryLoadError(MoveFinderError):
    """Raised when a word list or compiled dictionary cannot be read."""


class InvalidBoardError(MoveFinderError):
    """Raised when a board has inconsistent dimensions or an unknown cell symbol."""


class InvalidRackError(MoveFinderError):
    """Raised when a tray string holds a character that is neither a letter nor the wildcard marker."""


class ConfigError(MoveFinderError):
    """Raised when a settings file is unreadable or holds unknown or mistyped keys."""


class RackExhaustedError(RuntimeError):
    """A search branch tried to take a tile the rack does not hold.

    This is a bug in the caller, not a user error.
    """
