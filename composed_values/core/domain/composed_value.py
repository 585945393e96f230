"""
ComposedValue — композитное значение из независимых мультипликативных модификаторов

Итоговая величина = произведение результатов модификаторов, зарегистрированных
независимыми производителями, которые ничего не знают друг о друге.

Модификаторы двух уровней:
- cached: результат вычисляется один раз на цикл инвалидации
  (trigger_modifier_change / recalculate сбрасывают кэш)
- uncached: результат вычисляется заново при каждом чтении

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Пустое произведение = 1 (значение без модификаторов равно 1)
2. Результат всегда конечный: NaN/Inf → max_finite_value (знак отбрасывается)
3. Кэш результатов содержит только ключи кэшируемых модификаторов
4. Слушатели вызываются в порядке регистрации и только при смене значения
5. Все мутирующие операции возвращают self (chaining)

Однопоточная синхронная модель: внутренней синхронизации нет.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, Optional

from composed_values.core.domain.modifier_cache import ModifierValueCache
from composed_values.core.domain.snapshot import ComposedValueSnapshot
from composed_values.core.math.numerical_safeguards import (
    MAX_FINITE_VALUE,
    Number,
    finite_clamp,
    finite_multiply,
    product,
    validate_positive,
)

logger = logging.getLogger(__name__)

ModifierCallback = Callable[[], Number]
ValueChangeListener = Callable[[Number], object]


# =============================================================================
# EXCEPTIONS
# =============================================================================


class InvalidModifierError(TypeError):
    """Модификатор не является callable.

    Сообщение содержит key композитного значения, ключ модификатора
    и фактически полученный тип.
    """

    def __init__(self, composed_value_key: str, modifier_key: str, received: object):
        self.composed_value_key = composed_value_key
        self.modifier_key = modifier_key
        self.received_type = type(received).__name__
        super().__init__(
            f"Modifier '{modifier_key}' for composed value '{composed_value_key}' "
            f"must be callable, got {self.received_type}"
        )


class InvalidListenerError(TypeError):
    """Слушатель on_value_change не является callable."""

    def __init__(self, composed_value_key: str, received: object):
        self.composed_value_key = composed_value_key
        self.received_type = type(received).__name__
        super().__init__(
            f"on_value_change listener for composed value '{composed_value_key}' "
            f"must be callable, got {self.received_type}"
        )


# =============================================================================
# CONFIG
# =============================================================================


@dataclass(frozen=True)
class ComposedValueConfig:
    """Конфигурация композитного значения.

    - max_finite_value: значение, на которое заменяется не-конечный результат
    - debug_log_level: уровень логирования для debug()
    """

    max_finite_value: float = MAX_FINITE_VALUE
    debug_log_level: int = logging.INFO

    def __post_init__(self) -> None:
        validate_positive(self.max_finite_value, "max_finite_value")


# =============================================================================
# COMPOSED VALUE
# =============================================================================


class ComposedValue:
    """Именованная величина = произведение независимых модификаторов.

    Алгоритм get_value():
    1. aggregate инвалидирован → вычислить кэшируемые модификаторы без
       закэшированного результата, aggregate = произведение всех результатов
    2. uncached_product = произведение свежих результатов некэшируемых
    3. result = finite_clamp(aggregate * uncached_product)
    4. result != последнего отправленного → уведомить слушателей
    5. вернуть result

    Порядок вычисления кэшируемых модификаторов не гарантируется.
    """

    def __init__(self, key: str, config: Optional[ComposedValueConfig] = None):
        """
        Args:
            key: ключ композитного значения (используется в сообщениях об ошибках)
            config: конфигурация (опционально, используется default)
        """
        self._key = key
        self.config = config or ComposedValueConfig()

        self._cached_modifiers: dict[str, ModifierCallback] = {}
        self._uncached_modifiers: dict[str, ModifierCallback] = {}
        self._cache = ModifierValueCache()

        self._last_emitted_value: Optional[Number] = None
        self._listeners: list[ValueChangeListener] = []

    def __repr__(self) -> str:
        return (
            f"ComposedValue(key={self._key!r}, "
            f"cached={list(self._cached_modifiers)}, "
            f"uncached={list(self._uncached_modifiers)})"
        )

    @property
    def key(self) -> str:
        return self._key

    @property
    def last_emitted_value(self) -> Optional[Number]:
        """Последнее значение, отправленное слушателям (None до первого чтения)."""
        return self._last_emitted_value

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    @property
    def modifier_keys(self) -> list[str]:
        """Ключи всех модификаторов: сначала кэшируемые, затем некэшируемые."""
        keys = list(self._cached_modifiers)
        keys.extend(k for k in self._uncached_modifiers if k not in self._cached_modifiers)
        return keys

    def has_modifier(self, modifier_key: str) -> bool:
        return modifier_key in self._cached_modifiers or modifier_key in self._uncached_modifiers

    # -------------------------------------------------------------------------
    # Жизненный цикл модификаторов
    # -------------------------------------------------------------------------

    def add_modifier(
        self,
        modifier_key: str,
        modifier_callback: ModifierCallback,
        cache: bool = True,
    ) -> "ComposedValue":
        """Регистрация модификатора. Существующий ключ того же уровня заменяется.

        Args:
            modifier_key: ключ модификатора
            modifier_callback: callable без аргументов, возвращающий множитель
                (например, `lambda: 2` удваивает значение)
            cache: кэшировать ли результат. Кэшированный результат обновляется
                только после trigger_modifier_change(modifier_key) или recalculate().
                Некэшируемый модификатор вызывается при каждом чтении.

        Returns:
            self

        Raises:
            InvalidModifierError: если modifier_callback не callable
        """
        if not callable(modifier_callback):
            raise InvalidModifierError(self._key, modifier_key, modifier_callback)

        if not cache:
            self._uncached_modifiers[modifier_key] = modifier_callback
            return self

        self._cached_modifiers[modifier_key] = modifier_callback
        self._cache.invalidate(modifier_key)
        logger.debug("Composed value '%s': cached modifier '%s' registered", self._key, modifier_key)

        return self

    def remove_modifier(self, modifier_key: str) -> "ComposedValue":
        """Удаление модификатора из обоих уровней (no-op для неизвестного ключа)."""
        self._cached_modifiers.pop(modifier_key, None)
        self._uncached_modifiers.pop(modifier_key, None)
        self._cache.invalidate(modifier_key)
        logger.debug("Composed value '%s': modifier '%s' removed", self._key, modifier_key)

        return self

    def trigger_modifier_change(self, modifier_key: str) -> "ComposedValue":
        """Результат модификатора устарел из-за внешних изменений.

        Следующее чтение вызовет модификатор заново. Некэшируемые модификаторы
        не затрагиваются.
        """
        self._cache.invalidate(modifier_key)
        logger.debug("Composed value '%s': modifier '%s' invalidated", self._key, modifier_key)

        return self

    def recalculate(self) -> "ComposedValue":
        """Сброс всего кэша: следующее чтение вызовет все кэшируемые модификаторы."""
        self._cache.invalidate_all()
        logger.debug("Composed value '%s': full recalculation requested", self._key)

        return self

    # -------------------------------------------------------------------------
    # Чтение значения
    # -------------------------------------------------------------------------

    def get_value(self) -> Number:
        """Текущее значение композитной величины.

        Может заполнить кэш и вызвать слушателей on_value_change.

        Returns:
            Конечное произведение всех модификаторов
        """
        if not self._cache.is_aggregate_valid:
            self._calculate_modifier_values()
            self._cache.set_aggregate(product(self._cache.values()))

        value = finite_multiply(
            self._cache.aggregate,
            self._get_uncached_modifier_value(),
            max_value=self.config.max_finite_value,
        )

        if self._last_emitted_value is None or value != self._last_emitted_value:
            if value == self.config.max_finite_value:
                logger.warning(
                    "Composed value '%s' saturated at max finite value %s", self._key, value
                )
            self._notify_listeners(value)
            self._last_emitted_value = value

        return value

    def get_value_excluding_modifier(self, exclude_modifiers: Iterable[str] = ()) -> Number:
        """Значение без вклада указанных модификаторов.

        Сначала выполняется обычное чтение get_value() (кэш заполняется,
        слушатели вызываются как обычно), затем считается отфильтрованное
        произведение. last_emitted_value не меняется.

        Args:
            exclude_modifiers: ключи исключаемых модификаторов
                (строка трактуется как один ключ)

        Returns:
            Конечное произведение без исключённых модификаторов
        """
        if isinstance(exclude_modifiers, str):
            exclude_modifiers = (exclude_modifiers,)
        excluded = frozenset(exclude_modifiers)

        self.get_value()

        uncached_values = [
            modifier()
            for modifier_key, modifier in self._uncached_modifiers.items()
            if modifier_key not in excluded
        ]
        cached_values = [
            value
            for modifier_key, value in self._cache.items()
            if modifier_key not in excluded
        ]

        return finite_multiply(
            product(uncached_values),
            product(cached_values),
            max_value=self.config.max_finite_value,
        )

    # -------------------------------------------------------------------------
    # Слушатели
    # -------------------------------------------------------------------------

    def on_value_change(self, callback: ValueChangeListener) -> "ComposedValue":
        """Подписка на изменение значения.

        Слушатель получает новое значение первым аргументом. Дедупликации нет:
        слушатель, зарегистрированный дважды, вызывается дважды.

        Raises:
            InvalidListenerError: если callback не callable
        """
        if not callable(callback):
            raise InvalidListenerError(self._key, callback)

        self._listeners.append(callback)

        return self

    # -------------------------------------------------------------------------
    # Диагностика
    # -------------------------------------------------------------------------

    def snapshot(self) -> ComposedValueSnapshot:
        """Снапшот значения и вклада каждого модификатора (читает значение).

        Вклад каждого модификатора проходит через тот же finite clamp,
        что и итоговое значение.
        """
        value = self.get_value()
        max_value = self.config.max_finite_value

        return ComposedValueSnapshot(
            key=self._key,
            value=value,
            cached_modifiers={
                modifier_key: finite_clamp(result, max_value=max_value)
                for modifier_key, result in self._cache.items()
            },
            uncached_modifiers={
                modifier_key: finite_clamp(modifier(), max_value=max_value)
                for modifier_key, modifier in self._uncached_modifiers.items()
            },
        )

    def debug(self) -> ComposedValueSnapshot:
        """Запись в лог текущего значения и модификаторов, влияющих на него.

        В лог пишется проверенный контракт снапшота (см. ComposedValueSnapshot.to_contract).
        """
        snapshot = self.snapshot()
        contract = snapshot.to_contract()
        level = self.config.debug_log_level

        logger.log(level, "Debug for composed value '%s'. Calculated value %s", contract["key"], contract["value"])
        logger.log(level, "Cached modifiers:")
        for modifier_key, value in contract["cached_modifiers"].items():
            logger.log(level, "  - %s %s", modifier_key, value)
        logger.log(level, "Uncached modifiers:")
        for modifier_key, value in contract["uncached_modifiers"].items():
            logger.log(level, "  - %s %s", modifier_key, value)

        return snapshot

    # -------------------------------------------------------------------------
    # Внутренние методы
    # -------------------------------------------------------------------------

    def _calculate_modifier_values(self) -> None:
        """Вычисление кэшируемых модификаторов, отсутствующих в кэше."""
        for modifier_key, modifier in self._cached_modifiers.items():
            if modifier_key not in self._cache:
                self._cache.store(modifier_key, modifier())

    def _get_uncached_modifier_value(self) -> Number:
        return product([modifier() for modifier in self._uncached_modifiers.values()])

    def _notify_listeners(self, value: Number) -> None:
        logger.debug(
            "Composed value '%s' changed to %s, notifying %d listener(s)",
            self._key,
            value,
            len(self._listeners),
        )
        for listener in self._listeners:
            listener(value)
