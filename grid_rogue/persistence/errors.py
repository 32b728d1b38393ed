"""Persistence error taxonomy.

Every failure of :class:`grid_rogue.persistence.SaveStore` is raised as a
subclass of :class:`PersistenceError`, so callers can catch the whole family
or pick out the kinds they treat differently. A missing save file is an
expected condition (the main menu reports "no saved game"), not a crash.
"""


class PersistenceError(Exception):
    """Base class for save/load failures."""


class SaveNotFoundError(PersistenceError):
    """There is no save file to load."""


class SaveIOError(PersistenceError):
    """The save file could not be read or written (permissions, disk, ...)."""


class SaveDecodeError(PersistenceError):
    """The save file exists but its content is not a valid save."""


class SaveVersionError(SaveDecodeError):
    """The save file was written with an incompatible schema version."""

    def __init__(self, found: object, expected: int) -> None:
        super().__init__(
            f"Unsupported save version {found!r} (expected {expected})"
        )
        self.found = found
        self.expected = expected


class SaveEncodeError(PersistenceError):
    """The state could not be turned into a save payload."""
