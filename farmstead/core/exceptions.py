class FarmsteadError(Exception):
    """Base exception for the farmstead engine."""


class ConfigLoadError(FarmsteadError):
    """Raised when a configuration document cannot be read or parsed."""


class PersistenceError(FarmsteadError):
    """Raised when saved game data cannot be read or written."""


class NoSaveFoundError(PersistenceError):
    """Raised when a requested save slot holds no data."""


class CorruptSaveError(PersistenceError):
    """Raised when a save payload is unparseable or fails validation."""
