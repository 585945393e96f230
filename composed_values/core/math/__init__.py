"""
Core math modules для composed-values

Математические примитивы с гарантией конечности результата.
"""

# Numerical Safeguards
from composed_values.core.math.numerical_safeguards import (
    # Limits
    MAX_FINITE_VALUE,
    Number,
    # NaN/Inf sanitization
    finite_clamp,
    is_valid_float,
    # Products
    finite_multiply,
    product,
    # Validation
    validate_positive,
)

__all__ = [
    # Numerical Safeguards — Limits
    "MAX_FINITE_VALUE",
    "Number",
    # Numerical Safeguards — NaN/Inf sanitization
    "finite_clamp",
    "is_valid_float",
    # Numerical Safeguards — Products
    "finite_multiply",
    "product",
    # Numerical Safeguards — Validation
    "validate_positive",
]
