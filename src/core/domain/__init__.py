"""
Domain models and value objects.

Contains reference-vector models used to compare the numeric core against
the platform math library.
"""

from src.core.domain.reference import (
    FloatLiteral,
    ReferenceCase,
    ReferenceFunction,
    ReferenceSuite,
    SpecialValue,
)

__all__ = [
    "FloatLiteral",
    "ReferenceCase",
    "ReferenceFunction",
    "ReferenceSuite",
    "SpecialValue",
]
