"""
Test Suite for Structure Curation.

Test organization:
    - unit/: Unit tests for individual components
    - integration/: End-to-end integration tests
    - fixtures/: Shared test fixtures and sample data

Running Tests:
    pytest tests/                           # All tests
    pytest tests/unit/                      # Unit tests only
    pytest tests/integration/               # Integration tests only
    pytest -m "not slow"                    # Skip large generated collections
"""
