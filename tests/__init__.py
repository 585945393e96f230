"""
Test suite for composed-values

Contains:
- tests/unit/          : Unit tests for individual modules
"""
