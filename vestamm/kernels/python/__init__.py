"""
Production Python kernels.

These modules are designed to be:
- deterministic (integer-only, explicit widths),
- easy to audit (explicit intermediate variables),
- pure functions with typed, frozen results.
"""
