"""
Domain entities and value objects.
"""
from .story import (
    FieldKey,
    REQUIRED_FIELDS,
    REQUIRED_FIELD_MESSAGES,
    Priority,
    ColumnMapping,
    StoryRecord,
    synthesize_story_id,
)
from .parse_report import ParseReport
from .test_case import (
    TestingScope,
    GenerationContext,
    TestStep,
    TestArtifact,
    GenerationSummary,
    GenerationMetadata,
    GenerationResult,
    summarize,
)
from .errors import (
    MappingRejected,
    RowError,
    ROW_SKIPPED,
    SpreadsheetReadError,
    ProviderError,
    ProviderNotFoundError,
    ProviderMisconfiguredError,
    ProviderCallError,
    ResponseFormatError,
)

__all__ = [
    'FieldKey',
    'REQUIRED_FIELDS',
    'REQUIRED_FIELD_MESSAGES',
    'Priority',
    'ColumnMapping',
    'StoryRecord',
    'synthesize_story_id',
    'ParseReport',
    'TestingScope',
    'GenerationContext',
    'TestStep',
    'TestArtifact',
    'GenerationSummary',
    'GenerationMetadata',
    'GenerationResult',
    'summarize',
    'MappingRejected',
    'RowError',
    'ROW_SKIPPED',
    'SpreadsheetReadError',
    'ProviderError',
    'ProviderNotFoundError',
    'ProviderMisconfiguredError',
    'ProviderCallError',
    'ResponseFormatError',
]
