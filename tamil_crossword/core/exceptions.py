"""Custom exception hierarchy for puzzle placement, scoring and storage."""


class CrosswordError(Exception):
    """Base exception for engine failures."""


class SlotPlacementError(CrosswordError):
    """Raised when a word cannot be placed without breaking grid rules."""


class EmptyAnswerError(SlotPlacementError):
    """Raised when an answer decomposes into zero letters."""


class OutOfBoundsError(SlotPlacementError):
    """Raised when a word span leaves the grid."""


class ConflictingLetterError(SlotPlacementError):
    """Raised when a word disagrees with a letter already on the grid."""


class NoCrossingFoundError(SlotPlacementError):
    """Raised when automatic placement finds no valid crossing."""


class LengthMismatchError(SlotPlacementError):
    """Raised when the declared letter count differs from the decomposed one."""


class RebuildError(CrosswordError):
    """Raised when replaying the entry sequence fails to reproduce the grid."""


class InvalidSnapshotError(CrosswordError):
    """Raised when a persisted snapshot cannot be verified in full."""


class PersistenceError(CrosswordError):
    """Raised when a puzzle snapshot cannot be saved or fetched."""
