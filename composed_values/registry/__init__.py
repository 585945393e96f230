"""Registry — общий доступ к композитным значениям по строковому ключу."""

from .composed_value_registry import ComposedValueRegistry

__all__ = [
    "ComposedValueRegistry",
]
