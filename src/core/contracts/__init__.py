"""
Contract Validation Module

Валидация JSON эталонных наборов (reference suites).
"""

from .validators import (
    ContractValidator,
    ReferenceSuiteValidator,
    SchemaLoader,
    get_schema_loader,
    load_reference_suite,
    validate_reference_suite,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "ReferenceSuiteValidator",
    # Functions
    "get_schema_loader",
    "validate_reference_suite",
    "load_reference_suite",
]
