"""
Tests for ComposedValueSnapshot, debug() и JSON Schema контракта снапшота

Покрывает:
- Создание и валидация Pydantic модели
- Immutability (frozen=True)
- snapshot() / debug() композитного значения
- Логирование debug(), включая пустой ключ и огромные int модификаторы
- JSON Schema compliance
"""

import logging

import pytest
from jsonschema import ValidationError as SchemaValidationError
from pydantic import ValidationError

from composed_values import (
    MAX_FINITE_VALUE,
    ComposedValue,
    ComposedValueConfig,
    ComposedValueRegistry,
    ComposedValueSnapshot,
)
from composed_values.core.contracts import (
    SNAPSHOT_SCHEMA_NAME,
    load_schema,
    snapshot_validator,
    validate_snapshot,
)

COMPOSED_VALUE_LOGGER = "composed_values.core.domain.composed_value"


# =============================================================================
# FIXTURES
# =============================================================================


@pytest.fixture
def production():
    cv = ComposedValue("production")
    cv.add_modifier("base", lambda: 10)
    cv.add_modifier("boost", lambda: 2)
    cv.add_modifier("weather", lambda: 0.5, cache=False)
    return cv


@pytest.fixture
def valid_snapshot_data():
    """Валидный снапшот для тестирования."""
    return {
        "key": "production",
        "value": 10.0,
        "cached_modifiers": {"base": 10.0, "boost": 2.0},
        "uncached_modifiers": {"weather": 0.5},
    }


# =============================================================================
# PYDANTIC MODEL
# =============================================================================


class TestComposedValueSnapshot:
    """Тесты Pydantic модели снапшота."""

    def test_create_valid(self, valid_snapshot_data):
        snapshot = ComposedValueSnapshot(**valid_snapshot_data)

        assert snapshot.key == "production"
        assert snapshot.value == 10.0
        assert snapshot.cached_modifiers == {"base": 10.0, "boost": 2.0}

    def test_empty_key_accepted(self, valid_snapshot_data):
        """Пустой ключ допустим в реестре, значит допустим и в снапшоте."""
        valid_snapshot_data["key"] = ""

        snapshot = ComposedValueSnapshot(**valid_snapshot_data)

        assert snapshot.key == ""
        assert snapshot.to_contract()["key"] == ""

    def test_frozen(self, valid_snapshot_data):
        snapshot = ComposedValueSnapshot(**valid_snapshot_data)

        with pytest.raises(ValidationError):
            snapshot.value = 1.0

    def test_modifiers_default_empty(self):
        snapshot = ComposedValueSnapshot(key="empty", value=1.0)

        assert snapshot.cached_modifiers == {}
        assert snapshot.uncached_modifiers == {}


# =============================================================================
# snapshot() / debug()
# =============================================================================


class TestComposedValueDiagnostics:
    """Тесты snapshot() и debug() композитного значения."""

    def test_snapshot_contents(self, production):
        snapshot = production.snapshot()

        assert snapshot.key == "production"
        assert snapshot.value == pytest.approx(10.0)
        assert snapshot.cached_modifiers == {"base": 10.0, "boost": 2.0}
        assert snapshot.uncached_modifiers == {"weather": 0.5}

    def test_snapshot_reads_value_and_notifies(self, production):
        received = []
        production.on_value_change(received.append)

        production.snapshot()

        assert received == [pytest.approx(10.0)]

    def test_snapshot_of_empty_value(self):
        snapshot = ComposedValue("empty").snapshot()

        assert snapshot.value == 1
        assert snapshot.cached_modifiers == {}

    def test_debug_returns_snapshot(self, production):
        assert production.debug() == production.snapshot()

    def test_debug_logs_value_and_modifiers(self, production, caplog):
        with caplog.at_level(logging.INFO, logger=COMPOSED_VALUE_LOGGER):
            production.debug()

        assert "Debug for composed value 'production'" in caplog.text
        assert "Cached modifiers:" in caplog.text
        assert "  - base 10" in caplog.text
        assert "  - boost 2" in caplog.text
        assert "Uncached modifiers:" in caplog.text
        assert "  - weather 0.5" in caplog.text

    def test_debug_uses_configured_level(self, caplog):
        cv = ComposedValue("production", config=ComposedValueConfig(debug_log_level=logging.DEBUG))
        cv.add_modifier("base", lambda: 10)

        with caplog.at_level(logging.INFO, logger=COMPOSED_VALUE_LOGGER):
            cv.debug()

        assert "Debug for composed value" not in caplog.text

        with caplog.at_level(logging.DEBUG, logger=COMPOSED_VALUE_LOGGER):
            cv.debug()

        assert "Debug for composed value 'production'" in caplog.text

    def test_debug_with_empty_key_from_registry(self, caplog):
        registry = ComposedValueRegistry()
        cv = registry.get_composed_value("")
        cv.add_modifier("base", lambda: 3)

        with caplog.at_level(logging.INFO, logger=COMPOSED_VALUE_LOGGER):
            snapshot = cv.debug()

        assert snapshot.key == ""
        assert snapshot.value == 3
        assert "Debug for composed value ''" in caplog.text

    def test_debug_with_huge_cached_modifier(self, caplog):
        cv = ComposedValue("production").add_modifier("huge", lambda: 10**400)

        with caplog.at_level(logging.INFO, logger=COMPOSED_VALUE_LOGGER):
            snapshot = cv.debug()

        assert snapshot.value == MAX_FINITE_VALUE
        assert snapshot.cached_modifiers == {"huge": MAX_FINITE_VALUE}
        assert "Cached modifiers:" in caplog.text

    def test_debug_with_huge_uncached_modifier(self):
        cv = ComposedValue("production")
        cv.add_modifier("base", lambda: 2)
        cv.add_modifier("huge", lambda: 10**400, cache=False)

        snapshot = cv.debug()

        assert snapshot.value == MAX_FINITE_VALUE
        assert snapshot.cached_modifiers == {"base": 2.0}
        assert snapshot.uncached_modifiers == {"huge": MAX_FINITE_VALUE}


# =============================================================================
# JSON SCHEMA
# =============================================================================


class TestSnapshotContract:
    """Тесты JSON Schema контракта снапшота."""

    def test_schema_loads(self):
        schema = load_schema(SNAPSHOT_SCHEMA_NAME)

        assert schema["title"] == "ComposedValueSnapshot"

    def test_schema_is_loaded_once(self):
        assert load_schema(SNAPSHOT_SCHEMA_NAME) is load_schema(SNAPSHOT_SCHEMA_NAME)
        assert snapshot_validator() is snapshot_validator()

    def test_missing_schema_raises(self):
        with pytest.raises(FileNotFoundError):
            load_schema("does_not_exist")

    def test_valid_data(self, valid_snapshot_data):
        validate_snapshot(valid_snapshot_data)
        assert snapshot_validator().is_valid(valid_snapshot_data)

    def test_to_contract_returns_validated_data(self, production):
        data = production.snapshot().to_contract()

        assert data == {
            "key": "production",
            "value": pytest.approx(10.0),
            "cached_modifiers": {"base": 10.0, "boost": 2.0},
            "uncached_modifiers": {"weather": 0.5},
        }
        assert snapshot_validator().is_valid(data)

    def test_missing_required_field(self, valid_snapshot_data):
        del valid_snapshot_data["value"]

        with pytest.raises(SchemaValidationError):
            validate_snapshot(valid_snapshot_data)

    def test_wrong_modifier_value_type(self, valid_snapshot_data):
        valid_snapshot_data["cached_modifiers"]["base"] = "ten"

        errors = list(snapshot_validator().iter_errors(valid_snapshot_data))

        assert len(errors) == 1

    def test_additional_property_rejected(self, valid_snapshot_data):
        valid_snapshot_data["listeners"] = 2

        assert not snapshot_validator().is_valid(valid_snapshot_data)
