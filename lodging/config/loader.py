"""
ConfigLoader - fast-fail lookup of placement and ledger configuration.

A key resolves from the first source that has it:

    1. environment variable ``CONFIG_<KEY>`` (``priority.families.weight`` ->
       ``CONFIG_PRIORITY_FAMILIES_WEIGHT``), never cached
    2. PocketBase ``config`` collection, when a client is supplied or
       ``POCKETBASE_URL`` is set; cached for ``cache_ttl_seconds``
    3. the schema default

Unknown keys and invalid values raise immediately.
"""

from __future__ import annotations

import logging
import os
import time
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from pocketbase import PocketBase

from .errors import ConfigError, DatabaseUnavailableError, MissingKeyError, UnknownKeyError, ValidationError
from .schema import CONFIG_SCHEMA, CRITERIA_DEFAULTS, WARNING_KINDS
from .settings import AutoPlacementSettings, PlacementPriority, PlacementSettings, WarningSettings
from .types import ConfigKey

logger = logging.getLogger(__name__)

CONFIG_COLLECTION = "config"

_MISSING = object()


def env_var_for(key: str) -> str:
    return "CONFIG_" + key.upper().replace(".", "_")


def record_filter(key: str) -> str:
    """PocketBase filter for a key's record.

    Records are stored as category / subcategory / config_key, so
    ``priority.families.weight`` lives under category "priority",
    subcategory "families", config_key "weight". Two-part keys have no
    subcategory.
    """
    category, *middle, config_key = key.split(".") if "." in key else ("general", key)
    clauses = [f'category = "{category}"', f'config_key = "{config_key}"']
    if middle:
        clauses.append(f'subcategory = "{"_".join(middle)}"')
    else:
        clauses.append('(subcategory = null || subcategory = "")')
    return " && ".join(clauses)


def _schema_for(key: str) -> ConfigKey:
    schema = CONFIG_SCHEMA.get(key)
    if schema is None:
        raise UnknownKeyError(f"Unknown config key: '{key}'")
    return schema


class ConfigLoader:
    """
    Process-wide configuration source.

    Usage:
        ConfigLoader.initialize()                  # validates every key
        loader = ConfigLoader.get_instance()
        settings = loader.load_placement_settings()

        with ConfigLoader.use(other_loader):       # tests
            ...
    """

    _instance: ConfigLoader | None = None
    _initialized: bool = False

    def __init__(self, pb_client: PocketBase | None = None, cache_ttl_seconds: int = 300):
        if pb_client is None and os.environ.get("POCKETBASE_URL"):
            pb_client = self._connect()
        self._pb = pb_client
        self._cache_ttl = cache_ttl_seconds
        self._cache: dict[str, tuple[Any, float]] = {}
        self._validated = False

    @staticmethod
    def _connect() -> PocketBase:
        pb = PocketBase(os.environ["POCKETBASE_URL"])
        email = os.environ.get("POCKETBASE_ADMIN_EMAIL")
        password = os.environ.get("POCKETBASE_ADMIN_PASSWORD")
        if email and password:
            try:
                pb.collection("_superusers").auth_with_password(email, password)
            except Exception as e:
                # Public config records may still be readable
                logger.warning(f"PocketBase admin login failed: {e}")
        return pb

    @property
    def has_database(self) -> bool:
        return self._pb is not None

    # ------------------------------------------------------------------
    # Singleton lifecycle
    # ------------------------------------------------------------------

    @classmethod
    def initialize(
        cls,
        pocketbase_url: str | None = None,
        validate_on_init: bool = True,
        pb_client: PocketBase | None = None,
    ) -> ConfigLoader:
        """
        Create the shared loader, once.

        Raises:
            ConfigError: a key is missing or invalid (when validating)
            DatabaseUnavailableError: PocketBase could not be queried
        """
        if cls._initialized and cls._instance is not None:
            return cls._instance

        if pocketbase_url:
            os.environ["POCKETBASE_URL"] = pocketbase_url

        loader = cls(pb_client=pb_client)
        if validate_on_init:
            loader.validate_all()

        cls._instance, cls._initialized = loader, True
        logger.info(f"Config loaded ({'PocketBase' if loader.has_database else 'environment and defaults'})")
        return loader

    @classmethod
    def get_instance(cls) -> ConfigLoader:
        if cls._initialized and cls._instance is not None:
            return cls._instance
        return cls.initialize(validate_on_init=False)

    @classmethod
    def reset(cls) -> None:
        cls._instance, cls._initialized = None, False

    @classmethod
    @contextmanager
    def use(cls, loader: ConfigLoader) -> Iterator[None]:
        """Swap in ``loader`` for the duration of the block."""
        saved = (cls._instance, cls._initialized)
        cls._instance, cls._initialized = loader, True
        try:
            yield
        finally:
            cls._instance, cls._initialized = saved

    def validate_all(self) -> None:
        """Resolve every registered key; report all failures together."""
        problems: list[str] = []
        for key in CONFIG_SCHEMA:
            try:
                self.get(key)
            except (MissingKeyError, ValidationError) as e:
                problems.append(str(e))
        if problems:
            raise ConfigError("Invalid configuration:\n  " + "\n  ".join(problems))
        self._validated = True
        logger.debug(f"Validated {len(CONFIG_SCHEMA)} config keys")

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def get(self, key: str) -> Any:
        """
        Typed value for ``key``.

        Raises:
            UnknownKeyError, MissingKeyError, ValidationError,
            DatabaseUnavailableError
        """
        schema = _schema_for(key)

        env_name = env_var_for(key)
        if env_name in os.environ:
            return self._checked(schema, os.environ[env_name], f"environment variable {env_name}")

        cached = self._cache.get(key)
        if cached is not None and time.time() - cached[1] < self._cache_ttl:
            return cached[0]

        raw = self._fetch(key)
        if raw is _MISSING:
            if schema.required:
                raise MissingKeyError(f"Config key '{key}' is required but not set")
            raw = schema.default

        value = self._checked(schema, raw, f"config key '{key}'")
        self._cache[key] = (value, time.time())
        return value

    def _checked(self, schema: ConfigKey, raw: Any, origin: str) -> Any:
        try:
            value = schema.convert(raw)
        except (TypeError, ValueError) as e:
            raise ValidationError(f"{origin}: cannot read {raw!r} as {schema.config_type.value} ({e})") from e
        problem = schema.validate(value)
        if problem:
            raise ValidationError(f"{origin}: {problem}")
        return value

    def _or_default(self, key: str, default: Any) -> Any:
        try:
            return self.get(key)
        except (MissingKeyError, UnknownKeyError):
            if default is None:
                raise
            return default

    def get_int(self, key: str, default: int | None = None) -> int:
        return int(self._or_default(key, default))

    def get_float(self, key: str, default: float | None = None) -> float:
        return float(self._or_default(key, default))

    def get_bool(self, key: str, default: bool | None = None) -> bool:
        return bool(self._or_default(key, default))

    def get_str(self, key: str, default: str | None = None) -> str:
        return str(self._or_default(key, default))

    def load_placement_settings(self) -> PlacementSettings:
        """Priorities, relaxation flag and warning toggles as one settings object."""
        priorities = [
            PlacementPriority(
                name=name,
                weight=self.get_float(f"priority.{name}.weight"),
                enabled=self.get_bool(f"priority.{name}.enabled"),
                label=label,
            )
            for name, _, _, label in CRITERIA_DEFAULTS
        ]
        return PlacementSettings(
            warnings=WarningSettings(**{kind: self.get_bool(f"warnings.{kind}.enabled") for kind in WARNING_KINDS}),
            auto_placement=AutoPlacementSettings(
                enabled=self.get_bool("placement.enabled"),
                priorities=priorities,
                allow_constraint_relaxation=self.get_bool("placement.allow_constraint_relaxation"),
            ),
        )

    # ------------------------------------------------------------------
    # PocketBase
    # ------------------------------------------------------------------

    def _fetch(self, key: str) -> Any:
        """Raw stored value, or ``_MISSING`` when there is no record or no database."""
        if self._pb is None:
            return _MISSING
        try:
            record = self._pb.collection(CONFIG_COLLECTION).get_first_list_item(record_filter(key))
        except Exception as e:
            if getattr(e, "status", None) == 404:
                return _MISSING
            raise DatabaseUnavailableError(f"Could not read config key '{key}': {e}") from e
        value = getattr(record, "value", None)
        return _MISSING if value is None else value

    def invalidate_cache(self, key: str | None = None) -> None:
        if key is None:
            self._cache.clear()
        else:
            self._cache.pop(key, None)

    def reload(self) -> None:
        self.invalidate_cache()

    def update_config(self, key: str, value: str | int | float | bool) -> None:
        """
        Store a new value for ``key`` in PocketBase.

        Raises:
            UnknownKeyError: key is not registered
            ValidationError: value is out of range
            ConfigError: no database configured
        """
        problem = _schema_for(key).validate(value)
        if problem:
            raise ValidationError(f"Cannot update '{key}': {problem}")
        if self._pb is None:
            raise ConfigError(f"Cannot update '{key}' without a configuration database")

        collection = self._pb.collection(CONFIG_COLLECTION)
        record = collection.get_first_list_item(record_filter(key))
        collection.update(record.id, {"value": value})
        self.invalidate_cache(key)
        logger.info(f"Config '{key}' set to {value!r}")

    def health_check(self) -> dict[str, Any]:
        issues: list[str] = []
        connected = False
        if self._pb is None:
            issues.append("No configuration database; using environment and defaults")
        else:
            try:
                self._pb.collection(CONFIG_COLLECTION).get_list(page=1, per_page=1)
                connected = True
            except Exception as e:
                issues.append(f"Database connection failed: {e}")

        return {
            "status": "unhealthy" if self._pb is not None and not connected else "healthy",
            "database_connected": connected,
            "validated": self._validated,
            "cached_keys": len(self._cache),
            "issues": issues,
        }
