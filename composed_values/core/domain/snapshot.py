"""
ComposedValueSnapshot — диагностический снапшот композитного значения

Immutable Pydantic модель: текущее значение и вклад каждого модификатора.
to_contract() возвращает JSON-совместимый dict, проверенный по JSON Schema
(contracts/schema/composed_value_snapshot.json).
"""

from typing import Any

from pydantic import BaseModel, Field

from composed_values.core.contracts import validate_snapshot


class ComposedValueSnapshot(BaseModel):
    """
    Снапшот композитного значения.

    Immutable модель (frozen=True). Содержит:
    - key композитного значения (любая строка, включая пустую)
    - итоговое значение (после finite clamp)
    - закэшированные результаты кэшируемых модификаторов
    - свежие результаты некэшируемых модификаторов
    """

    key: str = Field(..., description="Ключ композитного значения")
    value: float = Field(..., description="Итоговое значение после finite clamp")
    cached_modifiers: dict[str, float] = Field(
        default_factory=dict,
        description="Закэшированные результаты кэшируемых модификаторов",
    )
    uncached_modifiers: dict[str, float] = Field(
        default_factory=dict,
        description="Результаты некэшируемых модификаторов на момент снапшота",
    )

    model_config = {"frozen": True}

    def to_contract(self) -> dict[str, Any]:
        """
        JSON-совместимый dict снапшота.

        Raises:
            jsonschema.ValidationError: Если dict не соответствует контракту
        """
        data = self.model_dump(mode="json")
        validate_snapshot(data)
        return data
