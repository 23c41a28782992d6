class TRMapError(Exception):
    """Base error for trmap domain exceptions."""


class OutOfBounds(TRMapError, IndexError):
    """Raised when a cell coordinate falls outside a layer's valid range."""


class InvalidDimensions(TRMapError, ValueError):
    """Raised when a map or layer is constructed with non-positive dimensions."""


class InvalidCellValue(TRMapError, ValueError):
    """Raised when a value does not fit in a single unsigned byte cell."""


class ReentrantMutationError(TRMapError, RuntimeError):
    """Raised when the map is mutated from inside a change notification."""


class PersistenceError(TRMapError):
    """Raised when persistence (save/load) operations fail."""


class KeyNotFoundError(PersistenceError):
    """Raised when a store has no value under the requested key."""


class StoreError(PersistenceError):
    """Raised when the backing store fails to read or write."""
