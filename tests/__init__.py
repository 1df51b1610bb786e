"""
Test suite for the tolerance comparison core and the IDX dataset tooling

Contains:
- tests/unit/          : Unit tests for individual modules
- tests/conftest.py    : Synthetic IDX file fixtures
"""
