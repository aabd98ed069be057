"""
Test Suite

This module contains all tests for the Notify Core backend.

Structure:
    tests/
    ├── __init__.py         # This file
    ├── conftest.py         # Pytest fixtures
    ├── fakes.py            # In-memory repositories and identity directory
    ├── unit/               # Unit tests
    │   ├── test_engine/    # Parser, resolver and template engine tests
    │   └── test_services/  # Service layer tests
    └── integration/        # Integration tests
        └── test_api/       # API endpoint tests

To run tests:
    pytest backend/tests/
    pytest backend/tests/unit/
    pytest backend/tests/integration/
"""
