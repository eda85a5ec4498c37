"""Exception hierarchy for Visor.

The metrics engine never raises; these cover the workspace, storage,
session and registry layers.
"""


class VisorError(Exception):
    """Base class for all Visor errors."""


class WorkspaceNotFoundError(VisorError):
    """No visor.json found in the given directory or any parent."""


class WorkspaceExistsError(VisorError):
    """A workspace already exists at the target path."""


class StorageError(VisorError):
    """A data file could not be read or decoded."""


class RecordNotFoundError(StorageError):
    """Requested record does not exist (or belongs to another user)."""

    def __init__(self, kind: str, record_id: str):
        super().__init__(f"{kind} not found: {record_id}")
        self.kind = kind
        self.record_id = record_id


class SessionExpiredError(VisorError):
    """The session used for a repository call has expired."""


class CategoryRegistryError(VisorError):
    """The static category table is inconsistent."""
