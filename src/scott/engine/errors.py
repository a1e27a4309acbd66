"""Error types raised by the adventure loader and the save codec."""

from enum import StrEnum


class LoadFailure(StrEnum):
    """Why an adventure data file could not be loaded."""

    UNREADABLE = "unreadable"
    MALFORMED_INPUT = "malformed_input"
    TRUNCATED_DATA = "truncated_data"
    TYPE_MISMATCH = "type_mismatch"
    CHECKSUM_MISMATCH = "checksum_mismatch"
    INVALID_REFERENCE = "invalid_reference"


class SaveFailure(StrEnum):
    """Why a saved game could not be written or restored."""

    UNREADABLE = "unreadable"
    UNWRITABLE = "unwritable"
    MALFORMED = "malformed"
    WRONG_ADVENTURE = "wrong_adventure"
    OUT_OF_RANGE = "out_of_range"


class AdventureLoadError(Exception):
    """The adventure cannot be loaded. Always fatal."""

    def __init__(self, reason: LoadFailure, detail: str):
        super().__init__(f"cannot load adventure ({reason}): {detail}")
        self.reason = reason
        self.detail = detail


class SaveFileError(Exception):
    """A saved game could not be written or read back."""

    def __init__(self, reason: SaveFailure, detail: str):
        super().__init__(f"saved game error ({reason}): {detail}")
        self.reason = reason
        self.detail = detail
