"""
composed-values — incrementally cached multiplicative composed values.

Many independent producers contribute multiplicative modifiers to a shared,
named quantity without depending on each other or on a central owner.
"""

from composed_values.core.domain import (
    ComposedValue,
    ComposedValueConfig,
    ComposedValueSnapshot,
    InvalidListenerError,
    InvalidModifierError,
)
from composed_values.core.math import MAX_FINITE_VALUE, finite_clamp
from composed_values.registry import ComposedValueRegistry

__version__ = "1.0.0"

__all__ = [
    "ComposedValue",
    "ComposedValueConfig",
    "ComposedValueRegistry",
    "ComposedValueSnapshot",
    "InvalidListenerError",
    "InvalidModifierError",
    "MAX_FINITE_VALUE",
    "finite_clamp",
    "__version__",
]
