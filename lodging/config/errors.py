"""Exceptions raised by the configuration layer.

Configuration problems fail fast; placement and ledger code never sees them.
"""

from __future__ import annotations


class ConfigError(Exception):
    """Any configuration problem."""


class UnknownKeyError(ConfigError):
    """Key is not registered in ``CONFIG_SCHEMA``."""


class MissingKeyError(ConfigError):
    """Key without a default resolved to nothing."""


class ValidationError(ConfigError):
    """Value could not be converted or is out of range."""


class DatabaseUnavailableError(ConfigError):
    """PocketBase query failed for a reason other than a missing record."""
