"""ModifierValueCache — двухуровневый кэш композитного значения.

Уровни:
- per-modifier: последний вычисленный результат каждого кэшируемого модификатора
- aggregate: произведение всех закэшированных результатов

Состояние "отсутствует / вычислено" явное: наличие ключа в словаре для
per-modifier уровня и Optional слот для aggregate.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Инвалидация любого per-modifier значения инвалидирует aggregate
2. aggregate валиден только если все кэшируемые модификаторы вычислены
   (обеспечивает владелец кэша, ComposedValue)
"""

from typing import ItemsView, Optional, ValuesView

from composed_values.core.math.numerical_safeguards import Number


class ModifierValueCache:
    """Кэш результатов модификаторов и их агрегированного произведения."""

    def __init__(self) -> None:
        self._values: dict[str, Number] = {}
        self._aggregate: Optional[Number] = None

    # -------------------------------------------------------------------------
    # Per-modifier уровень
    # -------------------------------------------------------------------------

    def __contains__(self, modifier_key: object) -> bool:
        return modifier_key in self._values

    def items(self) -> ItemsView[str, Number]:
        return self._values.items()

    def values(self) -> ValuesView[Number]:
        return self._values.values()

    def store(self, modifier_key: str, value: Number) -> None:
        """Сохранение вычисленного результата модификатора.

        Args:
            modifier_key: ключ модификатора
            value: результат вызова модификатора
        """
        self._values[modifier_key] = value

    def invalidate(self, modifier_key: str) -> None:
        """Сброс результата одного модификатора (no-op если отсутствует).

        Aggregate инвалидируется всегда.
        """
        self._values.pop(modifier_key, None)
        self.invalidate_aggregate()

    def invalidate_all(self) -> None:
        """Полный сброс обоих уровней кэша."""
        self._values.clear()
        self.invalidate_aggregate()

    # -------------------------------------------------------------------------
    # Aggregate уровень
    # -------------------------------------------------------------------------

    @property
    def aggregate(self) -> Optional[Number]:
        """Закэшированное произведение или None если инвалидировано."""
        return self._aggregate

    @property
    def is_aggregate_valid(self) -> bool:
        return self._aggregate is not None

    def set_aggregate(self, value: Number) -> None:
        self._aggregate = value

    def invalidate_aggregate(self) -> None:
        self._aggregate = None
