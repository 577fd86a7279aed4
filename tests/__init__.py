"""
Tests for the Gherkin story test generator.

Test modules:
- test_models: Tests for domain entities
- test_cli: End-to-end tests for the command line interface
- unit/test_column_mapper: Tests for header recognition and mapping
- unit/test_row_normalizer: Tests for row normalization
- unit/test_story_parser: Tests for sheet parsing
- unit/test_story_validator: Tests for record validation
- unit/test_prompt_builder: Tests for prompt rendering
- unit/test_mock_provider: Tests for the deterministic provider
- unit/test_response_parser: Tests for backend reply parsing
- unit/test_remote_providers: Tests for remote adapters
- unit/test_provider_registry: Tests for the registry and factory
- unit/test_use_cases: Tests for application use cases
- unit/test_workbook_reader: Tests for spreadsheet decoding
- unit/test_environment_config: Tests for configuration
- unit/test_logger: Tests for structured logging
"""
