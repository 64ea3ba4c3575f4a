"""
Core domain models, mathematical primitives, and contracts.

Exact decimal arithmetic and IEEE 754 double inspection, independent
of any presentation layer.
"""
