"""Error taxonomy for stepdoc."""


class StepdocError(Exception):
    """Base exception for stepdoc errors."""


class DocumentValidationError(StepdocError):
    """Raised when a required title or content is missing on create."""


class NotFoundError(StepdocError):
    """Raised when a step, group, container or index does not exist."""


class SerializationError(StepdocError):
    """Raised when a JSON import has the wrong schema or missing fields."""


class StorageError(StepdocError):
    """Raised when a persistence backend fails."""
