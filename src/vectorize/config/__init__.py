"""Configuration management for vectorize.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments, a settings file, or defaults.

Key classes:
- TracingParameters: Tunable tracing parameters with persistence round-trip
- OutputConfig: Output units and format
- LoggingConfig: Logging settings
- VectorizeSettings: Main application settings
- SettingsStore / JsonSettingsStore: Key/value persistence
"""

from vectorize.config.settings import (
    CORNER_THRESHOLD_MAX,
    STORE_KEYS,
    LoggingConfig,
    OutputConfig,
    OutputFormat,
    TracingParameters,
    TurnPolicy,
    UnitSystem,
    VectorizeSettings,
    get_default_settings,
)
from vectorize.config.store import JsonSettingsStore, SettingsStore

__all__ = [
    "CORNER_THRESHOLD_MAX",
    "STORE_KEYS",
    "JsonSettingsStore",
    "LoggingConfig",
    "OutputConfig",
    "OutputFormat",
    "SettingsStore",
    "TracingParameters",
    "TurnPolicy",
    "UnitSystem",
    "VectorizeSettings",
    "get_default_settings",
]
