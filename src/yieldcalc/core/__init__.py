"""
Core domain models, mathematical primitives, and contracts.

This package is independent of any UI or persistence layer: it takes
structured input and returns structured results.
"""
