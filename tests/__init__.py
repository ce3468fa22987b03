"""
Test suite for sale_economics

Contains:
- tests/unit/          : Unit tests for calculation modules, models and contracts
"""
