"""
Snapshot Contract Validation

JSON Schema контракт снапшота композитного значения. ComposedValueSnapshot.to_contract()
проверяет свой результат через validate_snapshot(), поэтому debug() всегда
пишет в лог данные, соответствующие контракту.

Схема поставляется внутри пакета (contracts/schema/) и загружается лениво
при первой проверке.
"""

import json
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Final

import jsonschema
from jsonschema import Draft202012Validator

SCHEMA_DIR: Final[Path] = Path(__file__).parent / "schema"

SNAPSHOT_SCHEMA_NAME: Final[str] = "composed_value_snapshot"


@lru_cache(maxsize=None)
def load_schema(schema_name: str) -> Dict[str, Any]:
    """
    Загрузка и meta-validation JSON Schema (результат кэшируется).

    Args:
        schema_name: Имя схемы без расширения

    Returns:
        Загруженная схема как dict

    Raises:
        FileNotFoundError: Если файл схемы не найден
        ValueError: Если схема не проходит meta-validation
    """
    schema_path = SCHEMA_DIR / f"{schema_name}.json"
    if not schema_path.exists():
        raise FileNotFoundError(f"Schema not found: {schema_path}")

    with open(schema_path, "r", encoding="utf-8") as f:
        schema = json.load(f)

    try:
        Draft202012Validator.check_schema(schema)
    except jsonschema.SchemaError as e:
        raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}") from e

    return schema


@lru_cache(maxsize=1)
def snapshot_validator() -> Draft202012Validator:
    """Validator контракта снапшота (создаётся один раз)."""
    return Draft202012Validator(load_schema(SNAPSHOT_SCHEMA_NAME))


def validate_snapshot(data: Dict[str, Any]) -> None:
    """
    Валидация снапшота композитного значения.

    Args:
        data: Данные для валидации (результат ComposedValueSnapshot.to_contract())

    Raises:
        jsonschema.ValidationError: Если данные не соответствуют схеме
    """
    snapshot_validator().validate(data)
