"""Error taxonomy for backup definition reconciliation."""

from __future__ import annotations


class BackupDefinitionError(RuntimeError):
    """Base class for errors raised while reconciling backup definitions."""


class IdentityError(BackupDefinitionError):
    """Raised when a record cannot be resolved to a subject identity."""


class MissingIdentityError(IdentityError):
    """Raised when neither ``repository`` nor both subject fields are provided."""

    def __init__(self, message: str | None = None) -> None:
        super().__init__(
            message
            or "Either 'repository' or both 'subject_type' and 'subject_name' must be provided."
        )


class ImportIdFormatError(BackupDefinitionError, ValueError):
    """Raised when an import identifier matches neither accepted shape."""

    def __init__(self, import_id: str) -> None:
        super().__init__(
            "Expected import identifier with format: platform/account/repository or "
            f"platform/account/subject_type/subject_name. Got: {import_id!r}"
        )
        self.import_id = import_id


class RemoteError(BackupDefinitionError):
    """Raised when the remote store call fails or answers with a non-success status."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        status: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.status = status


class DuplicateDefinitionError(BackupDefinitionError):
    """Raised when two declared records address the same remote definition."""


__all__ = [
    "BackupDefinitionError",
    "DuplicateDefinitionError",
    "IdentityError",
    "ImportIdFormatError",
    "MissingIdentityError",
    "RemoteError",
]
