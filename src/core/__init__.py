"""
Core floating-point primitives, reference-vector models and contracts.

This package contains pure, deterministic numeric routines that do not
depend on the platform math library.
"""
