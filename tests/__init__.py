"""
Test suite for fp-rounding-diagnostics

Contains:
- tests/unit/          : Unit tests for individual modules
"""
