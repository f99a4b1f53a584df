"""Custom exception hierarchy for the word search game."""


class WordSearchError(Exception):
    """Base exception for game failures."""


class StageFetchError(WordSearchError):
    """Raised when stage data cannot be fetched or does not match the schema."""


class PlacementError(WordSearchError):
    """Raised when a word cannot be written into the grid."""


class SelectionError(WordSearchError):
    """Raised when a cell selection cannot be applied."""


class ProgressStoreError(WordSearchError):
    """Raised when saved progress cannot be written."""
