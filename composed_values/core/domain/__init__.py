"""
Domain models and value objects.

Contains the composed value engine, its two-level modifier cache and the
diagnostic snapshot model.
"""

from composed_values.core.domain.composed_value import (
    ComposedValue,
    ComposedValueConfig,
    InvalidListenerError,
    InvalidModifierError,
    ModifierCallback,
    ValueChangeListener,
)
from composed_values.core.domain.modifier_cache import ModifierValueCache
from composed_values.core.domain.snapshot import ComposedValueSnapshot

__all__ = [
    # Composed value
    "ComposedValue",
    "ComposedValueConfig",
    "ModifierCallback",
    "ValueChangeListener",
    # Exceptions
    "InvalidListenerError",
    "InvalidModifierError",
    # Cache
    "ModifierValueCache",
    # Snapshot
    "ComposedValueSnapshot",
]
