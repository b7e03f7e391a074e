"""
Core math modules

Элементарные операции с плавающей точкой без платформенной libm:
разложение/сборка, 64-bit fixed-point деление, квадратный корень,
натуральный логарифм.
"""

# Float Formats
from src.core.math.float_formats import (
    DOUBLE,
    EXTENDED,
    FLOAT_CONSTANTS,
    FORMATS,
    SINGLE,
    FloatFormat,
    UnsupportedFormatError,
    as_format,
    coerce_format,
    get_format,
    resolve_format,
)

# Iteration Limits
from src.core.math.limits import DEFAULT_LIMITS, IterationLimits

# Compensated Summation
from src.core.math.summation import CompensatedSum

# Decomposition
from src.core.math.decomposition import (
    Decomposed,
    decompose,
    isinf,
    isnan,
    recompose,
)

# Fixed Point
from src.core.math.fixed_point import (
    FIXED64_BITS,
    FIXED64_HIGH_BIT,
    SQRT_HALF_FIXED64,
    UINT64_MASK,
    DivModResult,
    FixedPointDomainError,
    div_mod,
    fraction64,
    int_to_float,
    round_to_digits,
    to_fixed64,
)

# Sqrt
from src.core.math.square_root import correct_floor_sqrt, sqrt, sqrt_newton

# Logarithm
from src.core.math.logarithm import (
    LOG_SMALL_MAX,
    LOG_SMALL_MIN,
    LogDomainViolation,
    log1p2x,
    log_small,
)

__all__ = [
    # Float Formats
    "DOUBLE",
    "EXTENDED",
    "FLOAT_CONSTANTS",
    "FORMATS",
    "SINGLE",
    "FloatFormat",
    "UnsupportedFormatError",
    "as_format",
    "coerce_format",
    "get_format",
    "resolve_format",
    # Iteration Limits
    "DEFAULT_LIMITS",
    "IterationLimits",
    # Compensated Summation
    "CompensatedSum",
    # Decomposition
    "Decomposed",
    "decompose",
    "isinf",
    "isnan",
    "recompose",
    # Fixed Point: Constants
    "FIXED64_BITS",
    "FIXED64_HIGH_BIT",
    "SQRT_HALF_FIXED64",
    "UINT64_MASK",
    # Fixed Point: Types
    "DivModResult",
    "FixedPointDomainError",
    # Fixed Point: Functions
    "div_mod",
    "fraction64",
    "int_to_float",
    "round_to_digits",
    "to_fixed64",
    # Sqrt
    "sqrt",
    "sqrt_newton",
    "correct_floor_sqrt",
    # Logarithm
    "LOG_SMALL_MAX",
    "LOG_SMALL_MIN",
    "LogDomainViolation",
    "log1p2x",
    "log_small",
]
