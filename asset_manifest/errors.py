"""Error taxonomy for manifest generation."""

from __future__ import annotations

from typing import Sequence


class ManifestError(RuntimeError):
    """Base class for failures that abort manifest generation."""


class PreconditionError(ManifestError):
    """Raised when build metadata is missing or cannot be interpreted."""


class ConfigError(ManifestError):
    """Raised when the manifest destination or format cannot be resolved."""


class ConflictError(ManifestError):
    """Raised when two outputs claim the same manifest key."""

    def __init__(self, identifier: str) -> None:
        super().__init__(f'There is a conflicting manifest key for "{identifier}".')
        self.identifier = identifier


class AmbiguousSiblingError(ManifestError):
    """Raised under the strict sibling policy when several companions match."""

    def __init__(self, identifier: str, candidates: Sequence[str]) -> None:
        joined = ", ".join(candidates)
        super().__init__(f'Multiple companion outputs match "{identifier}": {joined}')
        self.identifier = identifier
        self.candidates = tuple(candidates)


# Write failures surface as the filesystem's own exception, unchanged.
StorageError = OSError


__all__ = [
    "ManifestError",
    "PreconditionError",
    "ConfigError",
    "ConflictError",
    "AmbiguousSiblingError",
    "StorageError",
]
