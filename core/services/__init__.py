"""
Core services - story ingestion, validation and provider dispatch.
"""
from .field_patterns import FIELD_PATTERNS, match_field, normalize_header
from .column_mapper import ColumnMapper, MAPPING_REJECTED_MESSAGE
from .row_normalizer import RowNormalizer, stringify_cell
from .story_parser import StorySheetParser
from .story_validator import (
    StoryValidator,
    ValidationIssue,
    ValidationResult,
    ValidationSeverity,
)
from .metrics import StructuredLogger, configure_logging
from .provider_registry import ProviderRegistry

__all__ = [
    # Parsing
    'FIELD_PATTERNS',
    'match_field',
    'normalize_header',
    'ColumnMapper',
    'MAPPING_REJECTED_MESSAGE',
    'RowNormalizer',
    'stringify_cell',
    'StorySheetParser',
    # Validation
    'StoryValidator',
    'ValidationIssue',
    'ValidationResult',
    'ValidationSeverity',
    # Logging
    'StructuredLogger',
    'configure_logging',
    # Providers
    'ProviderRegistry',
]
