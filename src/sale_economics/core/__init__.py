"""
Core domain models, calculation primitives, and contracts.

This module contains the pure building blocks of the sale economics
calculator, independent of the form, storage and any other external system.
"""
