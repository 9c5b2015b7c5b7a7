"""
Test suite for the Mallows model numerical core

Contains:
- tests/unit/          : Unit tests for individual modules
"""
