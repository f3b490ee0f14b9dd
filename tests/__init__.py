"""
Test suite for the NewType library

Contains:
- tests/unit/          : Unit tests for individual modules
"""
