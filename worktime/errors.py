"""Custom exceptions."""


class WorktimeError(Exception):
    """Base exception for worktime."""


class EntryNotFoundError(WorktimeError):
    """Raised when a time entry id does not exist in the store."""


class UnknownStorageBackendError(WorktimeError):
    """Raised when settings name a storage backend that does not exist."""
