"""ComposedValueRegistry — реестр композитных значений по строковому ключу.

Явный объект (не глобальный синглтон): время жизни определяет тот,
кто создаёт реестр. Экземпляр ComposedValue создаётся лениво при первом
обращении и затем всегда возвращается тот же самый объект, поэтому
независимые производители и потребители разделяют состояние без координации.
"""

import logging
from typing import Iterator, KeysView, Optional

from composed_values.core.domain.composed_value import ComposedValue, ComposedValueConfig

logger = logging.getLogger(__name__)


class ComposedValueRegistry:
    """Отображение key → ComposedValue с ленивой инициализацией.

    Записи никогда не удаляются.
    """

    def __init__(self, config: Optional[ComposedValueConfig] = None):
        """
        Args:
            config: конфигурация для всех создаваемых значений
                (опционально, используется default)
        """
        self.config = config or ComposedValueConfig()
        self._entries: dict[str, ComposedValue] = {}

    def get_composed_value(self, key: str) -> ComposedValue:
        """Композитное значение для key; создаётся при первом обращении.

        Повторные вызовы с тем же key возвращают идентичный объект.
        """
        composed_value = self._entries.get(key)
        if composed_value is None:
            composed_value = ComposedValue(key, config=self.config)
            self._entries[key] = composed_value
            logger.debug("Composed value '%s' created", key)

        return composed_value

    def keys(self) -> KeysView[str]:
        return self._entries.keys()

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)
