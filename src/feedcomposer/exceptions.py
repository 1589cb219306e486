"""Custom exceptions for feedcomposer."""


class FeedComposerError(Exception):
    """Base exception for feedcomposer."""

    pass


class ConfigurationError(FeedComposerError):
    """Raised when there's a configuration issue."""

    pass


class DatabaseError(FeedComposerError):
    """Raised when there's a database issue."""

    pass


class DatabaseBusyError(DatabaseError):
    """Raised when the database is locked by another writer."""

    pass


class SourceError(FeedComposerError):
    """Raised when there's an issue with a content source."""

    pass


class SourceUnavailableError(SourceError):
    """Raised when a content source fails to count or fetch items."""

    def __init__(self, source: str, cause: Exception | None = None) -> None:
        self.source = source
        self.cause = cause
        message = f"Content source '{source}' is unavailable"
        if cause:
            message += f": {cause}"
        super().__init__(message)


class InvalidArgumentError(FeedComposerError, ValueError):
    """Raised when a feed request violates the page/limit contract."""

    pass


class FeedCancelledError(FeedComposerError):
    """Raised when a feed request is cancelled while merging."""

    pass
