"""
Test suite for the Treasury trading pipeline

Contains:
- tests/unit/          : Unit tests for individual modules
- tests/integration/   : End-to-end pipeline tests
"""
