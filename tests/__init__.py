#!/usr/bin/env python3
"""
Test suite configuration and utilities.

All tests are pure unit tests with no external services:

    # Run all tests
    python -m pytest tests/ -v

    # Using unittest
    python -m unittest discover tests -v

Shared child/household builders live in tests/fixtures/children.py.
"""
