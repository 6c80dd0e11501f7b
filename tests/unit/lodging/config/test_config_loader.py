"""Tests for the fast-fail ConfigLoader."""

from __future__ import annotations

import os
from unittest.mock import MagicMock, patch

import pytest

from lodging.config import (
    CONFIG_SCHEMA,
    ConfigError,
    ConfigLoader,
    DatabaseUnavailableError,
    UnknownKeyError,
    ValidationError,
    env_var_for,
    get_all_required_keys,
    record_filter,
    validate_key,
)


class NotFound(Exception):
    status = 404


def pb_with_values(values: dict[str, object]) -> MagicMock:
    """PocketBase mock serving ``config`` records keyed by their filter."""
    pb = MagicMock()

    def first_item(filter_str: str):
        for key, value in values.items():
            parts = key.split(".")
            if f'config_key = "{parts[-1]}"' in filter_str and (len(parts) < 3 or f'"{parts[1]}"' in filter_str):
                return MagicMock(id=f"rec-{key}", value=value)
        raise NotFound("missing")

    pb.collection.return_value.get_first_list_item.side_effect = first_item
    return pb


class TestSchema:
    def test_every_key_has_a_default(self):
        assert get_all_required_keys() == []

    def test_priority_keys_exist_for_each_criterion(self):
        for name in ("gender", "gendered_room", "families", "minimize_buildings", "bunk_preference", "age_compatibility"):
            assert f"priority.{name}.weight" in CONFIG_SCHEMA
            assert f"priority.{name}.enabled" in CONFIG_SCHEMA

    def test_validate_key(self):
        assert validate_key("priority.gender.weight", 10.0) is None
        assert "maximum" in validate_key("priority.gender.weight", 1000.0)
        assert "Unknown" in validate_key("nope.key", 1)


class TestGet:
    def test_defaults_without_database(self):
        loader = ConfigLoader()

        assert loader.has_database is False
        assert loader.get_float("priority.gender.weight") == 10.0
        assert loader.get_bool("priority.age_compatibility.enabled") is False
        assert loader.get_int("ledger.history_size") == 10

    def test_unknown_key_fails_fast(self):
        with pytest.raises(UnknownKeyError):
            ConfigLoader().get("priority.unknown.weight")

    def test_environment_overrides_database(self):
        loader = ConfigLoader(pb_client=pb_with_values({"priority.families.weight": 3}))
        with patch.dict(os.environ, {"CONFIG_PRIORITY_FAMILIES_WEIGHT": "7.5"}):
            assert loader.get_float("priority.families.weight") == 7.5

    def test_database_value_is_used_and_cached(self):
        pb = pb_with_values({"priority.families.weight": "3"})
        loader = ConfigLoader(pb_client=pb)

        assert loader.get_float("priority.families.weight") == 3.0
        assert loader.get_float("priority.families.weight") == 3.0
        assert pb.collection.return_value.get_first_list_item.call_count == 1

    def test_invalid_environment_value(self):
        with patch.dict(os.environ, {"CONFIG_LEDGER_HISTORY_SIZE": "0"}):
            with pytest.raises(ValidationError):
                ConfigLoader().get_int("ledger.history_size")

    def test_non_numeric_environment_value(self):
        with patch.dict(os.environ, {"CONFIG_PRIORITY_GENDER_WEIGHT": "heavy"}):
            with pytest.raises(ValidationError):
                ConfigLoader().get_float("priority.gender.weight")

    def test_database_failure_raises(self):
        pb = MagicMock()
        pb.collection.return_value.get_first_list_item.side_effect = RuntimeError("connection refused")

        with pytest.raises(DatabaseUnavailableError):
            ConfigLoader(pb_client=pb).get("placement.enabled")


class TestLifecycle:
    def test_initialize_validates_overrides(self):
        with patch.dict(os.environ, {"CONFIG_PRIORITY_GENDER_WEIGHT": "500"}):
            with pytest.raises(ConfigError):
                ConfigLoader.initialize()

    def test_initialize_returns_singleton(self):
        first = ConfigLoader.initialize()
        assert ConfigLoader.initialize() is first
        assert ConfigLoader.get_instance() is first

    def test_use_swaps_instance(self):
        replacement = ConfigLoader()
        with ConfigLoader.use(replacement):
            assert ConfigLoader.get_instance() is replacement

    def test_update_config_requires_database(self):
        with pytest.raises(ConfigError):
            ConfigLoader().update_config("priority.gender.weight", 5)

    def test_update_config_writes_and_invalidates(self):
        pb = pb_with_values({"priority.gender.weight": 10})
        loader = ConfigLoader(pb_client=pb)
        loader.get_float("priority.gender.weight")

        loader.update_config("priority.gender.weight", 4)

        pb.collection.return_value.update.assert_called_once_with("rec-priority.gender.weight", {"value": 4})
        assert "priority.gender.weight" not in loader._cache

    def test_health_check_without_database(self):
        result = ConfigLoader().health_check()
        assert result["status"] == "healthy"
        assert result["database_connected"] is False


class TestLoadPlacementSettings:
    def test_defaults(self):
        settings = ConfigLoader().load_placement_settings()

        assert [p.name for p in settings.auto_placement.priorities][0] == "gender"
        assert settings.weight_for("families") == 8.0
        assert settings.weight_for("age_compatibility") is None
        assert settings.auto_placement.allow_constraint_relaxation is True

    def test_overrides_flow_into_settings(self):
        env = {
            "CONFIG_PRIORITY_AGE_COMPATIBILITY_ENABLED": "true",
            "CONFIG_PLACEMENT_ALLOW_CONSTRAINT_RELAXATION": "false",
            "CONFIG_WARNINGS_BUNK_PREFERENCE_ENABLED": "false",
        }
        with patch.dict(os.environ, env):
            settings = ConfigLoader().load_placement_settings()

        assert settings.weight_for("age_compatibility") == 4.0
        assert settings.auto_placement.allow_constraint_relaxation is False
        assert settings.warnings.bunk_preference is False


class TestKeyNaming:
    @pytest.mark.parametrize(
        "key, env_name",
        [
            ("priority.families.weight", "CONFIG_PRIORITY_FAMILIES_WEIGHT"),
            ("ledger.history_size", "CONFIG_LEDGER_HISTORY_SIZE"),
        ],
    )
    def test_env_var_for(self, key, env_name):
        assert env_var_for(key) == env_name

    def test_record_filter_with_subcategory(self):
        assert record_filter("priority.families.weight") == (
            'category = "priority" && config_key = "weight" && subcategory = "families"'
        )

    def test_record_filter_without_subcategory(self):
        assert record_filter("placement.enabled") == (
            'category = "placement" && config_key = "enabled" && (subcategory = null || subcategory = "")'
        )
