"""
Test suite for BigDecimal

Contains:
- tests/unit/          : Unit tests for individual modules
"""
