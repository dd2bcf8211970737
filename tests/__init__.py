"""
Test suite for yieldcalc

Contains:
- tests/unit/          : Unit tests for individual modules
"""
