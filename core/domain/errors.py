"""
Error kinds for story ingestion and test case generation.

Mapping and row failures are returned as values so a bad sheet or a bad
row never aborts the enclosing batch. Only provider lookup and provider
configuration failures are raised to the caller.
"""
from dataclasses import dataclass, field
from typing import List, Optional

from core.domain.story import FieldKey


@dataclass(frozen=True)
class MappingRejected:
    """Header row could not be mapped to the required field set."""
    message: str
    missing_fields: List[FieldKey] = field(default_factory=list)


@dataclass(frozen=True)
class RowError:
    """A data row failed required-field validation."""
    message: str
    field: Optional[FieldKey] = None


class _RowSkipped:
    """Marker for a fully blank row."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "ROW_SKIPPED"

    def __bool__(self) -> bool:
        return False


ROW_SKIPPED = _RowSkipped()


class SpreadsheetReadError(Exception):
    """The spreadsheet could not be decoded into a cell grid."""


class ProviderError(Exception):
    """Base class for provider failures."""

    def __init__(self, message: str, provider_name: Optional[str] = None):
        super().__init__(message)
        self.provider_name = provider_name


class ProviderNotFoundError(ProviderError):
    """No provider is registered under the requested name."""


class ProviderMisconfiguredError(ProviderError):
    """The provider's configuration check failed."""


class ProviderCallError(ProviderError):
    """The backend call failed or returned nothing usable."""


class ResponseFormatError(ProviderCallError):
    """The backend reply did not have the structured test case shape."""
