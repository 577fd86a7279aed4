"""
Interfaces for dependency inversion.

External dependencies should depend on these abstractions, not concrete
implementations.
"""
from .test_case_provider import ITestCaseProvider, LLMResponse, ProviderType
from .spreadsheet_reader import ISpreadsheetReader

__all__ = [
    # Provider interfaces
    'ITestCaseProvider',
    'LLMResponse',
    'ProviderType',
    # Input interfaces
    'ISpreadsheetReader',
]
