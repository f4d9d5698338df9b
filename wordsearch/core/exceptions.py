"""Custom exception hierarchy for the word search engine."""


class WordSearchError(Exception):
    """Base exception for generator and session failures."""


class PlacementError(WordSearchError):
    """Raised when a word cannot be written at the requested cells."""


class GridValidationError(WordSearchError):
    """Raised when a generated grid fails its integrity checks."""


class ThemeWordError(WordSearchError):
    """Raised when no theme word list can be produced."""


class UnknownDifficultyError(WordSearchError, KeyError):
    """Raised when a difficulty key has no configuration."""


class UnknownLevelError(WordSearchError, KeyError):
    """Raised when a level id is outside the level table."""
