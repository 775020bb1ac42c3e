#!/usr/bin/env python3
"""
Test suite configuration.

All tests are unit tests and need no network access; completion calls go
through tests/mocks/llm_mocks.py.

    # Run all tests
    uv run python -m pytest tests/ -v

    # Run one area
    uv run python -m pytest tests/unit/web -v
"""
