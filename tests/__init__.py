"""
Test suite for fp-primitives

Contains:
- tests/unit/          : Unit tests for individual modules and reference-suite checks
"""
