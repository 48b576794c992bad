"""Configuration settings for Vectorize."""

from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from vectorize.exceptions import InvalidParameterError, SettingTypeError
from vectorize.utils.logging import get_logger

if TYPE_CHECKING:
    from vectorize.config.store import SettingsStore

logger = get_logger("vectorize.config")

# The useful corner range ends at 4/3 (no corners at all)
CORNER_THRESHOLD_MAX = 4.0 / 3.0

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class TurnPolicy(int, Enum):
    """How the tracer resolves ambiguous pixel configurations."""

    BLACK = 0
    WHITE = 1
    LEFT = 2
    RIGHT = 3
    MINORITY = 4
    MAJORITY = 5
    RANDOM = 6


class UnitSystem(str, Enum):
    """Target units for traced curves."""

    PIXELS = "pixels"
    INCHES = "inches"
    MILLIMETERS = "millimeters"
    CENTIMETERS = "centimeters"
    METERS = "meters"
    POINTS = "points"
    FEET = "feet"


class OutputFormat(str, Enum):
    """File format written by the CLI."""

    SVG = "svg"
    JSON = "json"


# Stable persistence keys, shared with settings files written by earlier releases
STORE_KEYS: dict[str, str] = {
    "turd_size": "TurdSize",
    "turn_policy": "TurnPolicy",
    "corner_threshold": "AlphaMax",
    "optimize_curves": "OptimizeCurve",
    "optimize_tolerance": "OptimizeTolerance",
    "brightness_threshold": "Threshold",
    "include_border": "IncludeBorder",
}

_NUMERIC_RANGES: dict[str, tuple[float, float]] = {
    "turd_size": (0, 100),
    "turn_policy": (0, 6),
    "corner_threshold": (0.0, CORNER_THRESHOLD_MAX),
    "optimize_tolerance": (0.0, 1.0),
    "brightness_threshold": (0.0, 1.0),
}


def _clamp(value: float, low: float, high: float) -> float:
    return min(max(value, low), high)


class TracingParameters(BaseModel):
    """Tunable tracing parameters.

    Construction and attribute assignment validate ranges and raise
    pydantic.ValidationError when a value is out of range. The brightness
    threshold is the exception: it is silently clamped on every write.
    Interactive callers use set_clamped() to clamp instead of raising.
    """

    model_config = ConfigDict(validate_assignment=True)

    turd_size: int = Field(
        default=2,
        ge=0,
        le=100,
        description="Despeckle threshold: paths enclosing fewer pixels are dropped",
    )
    turn_policy: TurnPolicy = Field(
        default=TurnPolicy.MINORITY,
        description="Ambiguity resolution policy used during decomposition",
    )
    corner_threshold: float = Field(
        default=1.0,
        ge=0.0,
        le=CORNER_THRESHOLD_MAX,
        description="Corner detection threshold, 0 (polygons) to 4/3 (no corners)",
    )
    optimize_curves: bool = Field(
        default=True,
        description="Allow adjacent Bezier segments to be merged",
    )
    optimize_tolerance: float = Field(
        default=0.2,
        ge=0.0,
        le=1.0,
        description="Error allowed when merging Bezier segments",
    )
    brightness_threshold: float = Field(
        default=0.5,
        ge=0.0,
        le=1.0,
        description="Pixels darker than this become foreground",
    )
    include_border: bool = Field(
        default=True,
        description="Emit a rectangle bounding the source image",
    )

    @field_validator("brightness_threshold", mode="before")
    @classmethod
    def _clamp_brightness(cls, value: Any) -> Any:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return value
        return _clamp(float(value), 0.0, 1.0)

    def set_clamped(self, name: str, value: Any) -> None:
        """Assign a parameter, clamping numeric values into range.

        Args:
            name: Field name, e.g. "turd_size"
            value: New value

        Raises:
            InvalidParameterError: If the field does not exist or a numeric field
                is given something other than a number
        """
        if name not in type(self).model_fields:
            raise InvalidParameterError(name, value, "unknown parameter")

        bounds = _NUMERIC_RANGES.get(name)
        if bounds is not None:
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise InvalidParameterError(name, value, "not a number")
            value = _clamp(value, *bounds)
            if name == "turd_size":
                value = int(value)
            elif name == "turn_policy":
                value = TurnPolicy(int(value))

        setattr(self, name, value)

    def restore_defaults(self) -> None:
        """Reset every field to its factory default."""
        defaults = type(self)()
        for name in type(self).model_fields:
            setattr(self, name, getattr(defaults, name))

    def load_from(self, store: "SettingsStore") -> None:
        """Read parameters from a persistent store.

        Each field is read independently. Missing keys leave the current
        value unchanged; values of the wrong type are logged and ignored;
        out-of-range values are clamped.

        Args:
            store: Settings store to read from
        """
        getters = {
            "turd_size": store.try_get_int,
            "turn_policy": store.try_get_int,
            "corner_threshold": store.try_get_float,
            "optimize_curves": store.try_get_bool,
            "optimize_tolerance": store.try_get_float,
            "brightness_threshold": store.try_get_float,
            "include_border": store.try_get_bool,
        }
        for name, key in STORE_KEYS.items():
            try:
                value = getters[name](key)
            except SettingTypeError as e:
                logger.warning("Ignoring stored setting", key=key, error=str(e))
                continue
            if value is not None:
                self.set_clamped(name, value)

    def save_to(self, store: "SettingsStore") -> None:
        """Write every parameter to a persistent store.

        Args:
            store: Settings store to write to
        """
        store.set_int(STORE_KEYS["turd_size"], self.turd_size)
        store.set_int(STORE_KEYS["turn_policy"], int(self.turn_policy))
        store.set_float(STORE_KEYS["corner_threshold"], self.corner_threshold)
        store.set_bool(STORE_KEYS["optimize_curves"], self.optimize_curves)
        store.set_float(STORE_KEYS["optimize_tolerance"], self.optimize_tolerance)
        store.set_float(STORE_KEYS["brightness_threshold"], self.brightness_threshold)
        store.set_bool(STORE_KEYS["include_border"], self.include_border)


class OutputConfig(BaseModel):
    """Configuration for curve output."""

    units: UnitSystem = Field(
        default=UnitSystem.PIXELS,
        description="Units the traced curves are scaled to",
    )
    dpi: float | None = Field(
        default=None,
        gt=0.0,
        description="Override for the image resolution (None = read from file)",
    )
    format: OutputFormat = Field(
        default=OutputFormat.SVG,
        description="Output file format",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )

    @field_validator("log_level", "file_log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if level not in LOG_LEVELS:
            valid = ", ".join(LOG_LEVELS)
            raise ValueError(f"unknown log level {value!r}, expected one of {valid}")
        return level


class VectorizeSettings(BaseModel):
    """Main application settings."""

    tracing: TracingParameters = Field(default_factory=TracingParameters)
    output: OutputConfig = Field(default_factory=OutputConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> VectorizeSettings:
    """Get default application settings."""
    return VectorizeSettings()
