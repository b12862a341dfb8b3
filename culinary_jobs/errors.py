"""Exception types raised by the pipeline."""
from __future__ import annotations


class PipelineError(Exception):
    """Base class for pipeline failures that callers are expected to handle."""


class ConfigError(PipelineError):
    """Run settings are missing or invalid."""


class StoreUnavailableError(PipelineError):
    """No database connection could be obtained.

    Raised by ``PersistenceStore.open``; the pipeline keeps the jobs it
    already fetched and skips only the persistence phase.
    """
