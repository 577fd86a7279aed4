"""
Application use cases.
"""
from .import_stories import ImportStoriesUseCase
from .generate_test_cases import GenerateTestCasesUseCase, GenerationRequest

__all__ = ['ImportStoriesUseCase', 'GenerateTestCasesUseCase', 'GenerationRequest']
